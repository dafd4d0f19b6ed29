from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Plain data object; ``user_id`` is the human-chosen login ID (e.g. ``T01T001``).
    ``teacher_id`` links a student to the teacher who owns their roster; ``grade``
    is the class label shown on that roster (students only).
    """

    user_id: str
    display_name: str
    password_hash: str
    role: Role
    teacher_id: Optional[str] = None
    grade: Optional[str] = None
    is_active: bool = True
