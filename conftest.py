"""Global pytest configuration."""

import os

# Force the deterministic stub model in tests, regardless of the developer's environment
os.environ["OPENAI_API_KEY"] = ""
