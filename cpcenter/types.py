"""Core value types shared by the CP material service messages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class _LabelledEnum(IntEnum):
    """Integer enum whose text form is its CamelCase label."""

    @property
    def label(self) -> str:
        return "".join(part.capitalize() for part in self.name.split("_"))

    def __str__(self) -> str:
        return self.label

    @classmethod
    def from_label(cls, name: str):
        for member in cls:
            if member.label == name:
                return member
        raise ValueError(f"not a valid {cls.__name__} string")


class MaterialStatus(_LabelledEnum):
    """Lifecycle state of a CP qualification material."""

    UNSET = 0
    DRAFT = 1
    REVIEWING = 2
    ONLINE = 3
    REJECTED = 4


class SubmitMode(_LabelledEnum):
    """How a material is submitted: kept as draft or sent for review."""

    UNSET = 0
    SUBMIT_DRAFT = 1
    SUBMIT_REVIEW = 2


class ReviewResult(_LabelledEnum):
    """Outcome of a material review."""

    UNSET = 0
    PASS = 1
    REJECT = 2


def parse_material_status(name: str) -> MaterialStatus:
    """Return the MaterialStatus with the given label; raise ValueError otherwise."""
    return MaterialStatus.from_label(name)


def parse_submit_mode(name: str) -> SubmitMode:
    """Return the SubmitMode with the given label; raise ValueError otherwise."""
    return SubmitMode.from_label(name)


def parse_review_result(name: str) -> ReviewResult:
    """Return the ReviewResult with the given label; raise ValueError otherwise."""
    return ReviewResult.from_label(name)


@dataclass
class BaseResp:
    """Status code and message carried by every response."""

    code: str = ""
    msg: str = ""


@dataclass
class CPMaterial:
    """Qualification material submitted by a content provider."""

    material_id: int = 0
    cp_id: int = 0
    cp_icon: str = ""
    cp_name: str = ""
    verification_images: list[str] | None = None
    business_licenses: str = ""
    website: str = ""
    status: MaterialStatus = MaterialStatus.UNSET
    review_comment: str = ""
    create_time: int = 0
    modify_time: int = 0


@dataclass
class ReviewRemark:
    """Reviewer's remark attached to a review decision."""

    remark: str = ""
    operator: str = ""
    review_time: int = 0
    meta: str = ""