"""Test helpers package"""

from .fake_model import ScriptedChatModel, final_users, tool_calls
from .seed import SEED_TODAY

__all__ = [
    "SEED_TODAY",
    "ScriptedChatModel",
    "final_users",
    "tool_calls",
]
