"""Request and response messages of the CP material service."""

from __future__ import annotations

from dataclasses import dataclass

from cpcenter.types import BaseResp, CPMaterial, ReviewRemark, ReviewResult, SubmitMode


@dataclass
class CreateCPMaterialRequest:
    """Ask to create a new qualification material for a CP."""

    cp_material: CPMaterial | None = None
    submit_mode: SubmitMode = SubmitMode.UNSET


@dataclass
class CreateCPMaterialResponse:
    """Identifiers of the CP and the material that were created."""

    cp_id: int = 0
    material_id: int = 0
    base_resp: BaseResp | None = None


@dataclass
class UpdateCPMaterialRequest:
    """Ask to change an existing material and how to submit it."""

    material_id: int = 0
    cp_material: CPMaterial | None = None
    submit_mode: SubmitMode = SubmitMode.UNSET


@dataclass
class UpdateCPMaterialResponse:
    """Outcome of a material update."""

    base_resp: BaseResp | None = None


@dataclass
class ReviewCPMaterialRequest:
    """A reviewer's decision on a material."""

    cp_id: int = 0
    material_id: int = 0
    review_result: ReviewResult = ReviewResult.UNSET
    review_remark: ReviewRemark | None = None


@dataclass
class ReviewCPMaterialResponse:
    """Outcome of a material review."""

    base_resp: BaseResp | None = None


@dataclass
class GetCPMaterialRequest:
    """Ask for a single material of a CP."""

    cp_id: int = 0
    material_id: int = 0


@dataclass
class GetCPMaterialResponse:
    """The material that was asked for, with the call's status."""

    cp_material: CPMaterial | None = None
    base_resp: BaseResp | None = None