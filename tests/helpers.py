"""Builders and fakes shared across test modules."""
import json
import asyncio
from typing import Dict, List, Optional

from database import MemoryKeyValueStore
from models.internal import CompanyProfile, SavedProfile
from services.errors import StorageError


def make_lead(name: str, email: str = "Hi there") -> dict:
    return {
        "report": {
            "companyName": name,
            "businessSector": "Retail",
            "keyContact": "CEO",
            "contactNumber": "+55 11 5555-0000",
            "companyWebsite": f"https://{name.lower().replace(' ', '')}.example",
            "digitalStatus": "Active on Instagram",
            "emailContact": "",
        },
        "email": email,
    }


def saved(profile_id: str, sector: str) -> SavedProfile:
    return SavedProfile(
        id=profile_id,
        name=f"Profile {profile_id}",
        profile=CompanyProfile(sector=sector, country="Brazil"),
    )


class ScriptedBackend:
    """Returns canned text for the first marker found in the prompt, or raises it if it is an exception."""

    def __init__(self, replies: Dict[str, object], gate: Optional[asyncio.Event] = None):
        self.replies = replies
        self.prompts: List[str] = []
        self.gate = gate

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.gate is not None:
            await self.gate.wait()
        for marker, reply in self.replies.items():
            if marker in prompt:
                if isinstance(reply, Exception):
                    raise reply
                return reply if isinstance(reply, str) else json.dumps(reply)
        raise AssertionError("No scripted reply for prompt")


class WriteFailingStore(MemoryKeyValueStore):
    """Reads work, every write raises StorageError."""

    def set(self, key, value):
        raise StorageError("quota exceeded")
