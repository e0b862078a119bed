"""
API Data Models

Plain dataclasses for the JSONPlaceholder records the client returns.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Address:
    city: str


@dataclass(frozen=True)
class Company:
    name: str


@dataclass(frozen=True)
class User:
    """Represents a user from the API."""
    id: int
    name: str
    username: str
    email: str
    address: Address
    company: Company

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "User":
        """Build a User from an API payload, ignoring fields we don't use."""
        return cls(
            id=data["id"],
            name=data["name"],
            username=data["username"],
            email=data["email"],
            address=Address(city=data["address"]["city"]),
            company=Company(name=data["company"]["name"]),
        )


@dataclass(frozen=True)
class Post:
    """Represents a post from the API."""
    id: int
    user_id: int
    title: str
    body: str

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Post":
        return cls(
            id=data["id"],
            user_id=data["userId"],
            title=data["title"],
            body=data["body"],
        )

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match on title or body."""
        needle = term.lower()
        return needle in self.title.lower() or needle in self.body.lower()


@dataclass(frozen=True)
class ProfileSummary:
    """A user's name and post count, as collected by the fan-out."""
    name: str
    post_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "postCount": self.post_count}
