"""Business operations on CP qualification materials."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime

from cpcenter import idgen
from cpcenter.messages import (
    CreateCPMaterialRequest,
    CreateCPMaterialResponse,
    GetCPMaterialRequest,
    GetCPMaterialResponse,
    ReviewCPMaterialRequest,
    ReviewCPMaterialResponse,
    UpdateCPMaterialRequest,
    UpdateCPMaterialResponse,
)
from cpcenter.models import GpCp, GpCpMaterial
from cpcenter.repository import CPMaterialRepository, CPRepository, RecordNotFoundError
from cpcenter.types import BaseResp, CPMaterial, MaterialStatus, ReviewResult, SubmitMode

logger = logging.getLogger(__name__)

SUCCESS_CODE = "0"
FAILURE_CODE = "500"


class InvalidArgumentError(ValueError):
    """A request failed validation."""


class MaterialNotFoundError(RecordNotFoundError):
    """The material named by a request does not exist."""

    def __init__(self, message: str = "material not found") -> None:
        super().__init__(message)


class UpdateFailedError(RuntimeError):
    """An update ran but changed no rows."""


_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _marshal_strings(values: list[str]) -> str:
    """Encode a list of strings as compact JSON with HTML-safe escapes."""
    text = json.dumps(list(values), ensure_ascii=False, separators=(",", ":"))
    for char, escape in _JSON_ESCAPES.items():
        text = text.replace(char, escape)
    return text


def _as_status(value: int) -> MaterialStatus | int:
    try:
        return MaterialStatus(value)
    except ValueError:
        return value


def _failure(message: str) -> BaseResp:
    return BaseResp(code=FAILURE_CODE, msg=message)


def _validate_create_request(req: CreateCPMaterialRequest) -> CPMaterial:
    material = req.cp_material
    if material is None:
        raise InvalidArgumentError("invalid arguments: CPMaterial cannot be nil")
    if material.cp_id == 0:
        raise InvalidArgumentError("invalid arguments: CpID is required")
    if not material.cp_name.strip():
        raise InvalidArgumentError(
            "invalid arguments: CpName is required and cannot be empty or whitespace"
        )
    return material


def _material_from_request(req: CreateCPMaterialRequest, info: CPMaterial) -> GpCpMaterial:
    if req.submit_mode == SubmitMode.SUBMIT_REVIEW:
        status = MaterialStatus.REVIEWING
    else:
        status = MaterialStatus.DRAFT
    images = _marshal_strings(info.verification_images) if info.verification_images else "[]"
    now = datetime.now()
    return GpCpMaterial(
        id=idgen.next_id(),
        cp_id=info.cp_id,
        cp_icon=info.cp_icon,
        cp_name=info.cp_name,
        verification_images=images,
        business_license=info.business_licenses,
        website=info.website,
        status=int(status),
        create_ts=now,
        modify_ts=now,
    )


def _cp_from_material(material: GpCpMaterial) -> GpCp:
    now = datetime.now()
    return GpCp(
        id=material.cp_id,
        cp_name=material.cp_name,
        newest_material_id=material.id,
        online_material_id=0,
        verify_status=0,
        create_ts=now,
        modify_ts=now,
    )


@dataclass
class CPMaterialHandler:
    """Creates, updates, reviews and fetches CP materials through the repositories."""

    material_repo: CPMaterialRepository
    cp_repo: CPRepository

    def create_cp_material(self, req: CreateCPMaterialRequest) -> CreateCPMaterialResponse:
        """Store a new material and create or refresh the CP it belongs to."""
        info = _validate_create_request(req)
        material = _material_from_request(req, info)

        try:
            self.material_repo.create_material(material)
        except Exception as err:
            raise RuntimeError(f"failed to create cp material in db: {err}") from err

        if self._cp_exists(material.cp_id):
            logger.info("CP %s exists, refreshing its newest material", material.cp_id)
            updates = {"newest_material_id": material.id, "cp_name": material.cp_name}
            try:
                self.cp_repo.update_cp(material.cp_id, updates)
            except Exception as err:
                raise RuntimeError(f"failed to update existing cp: {err}") from err
        else:
            logger.info("CP %s does not exist, creating it", material.cp_id)
            try:
                self.cp_repo.create_cp(_cp_from_material(material))
            except Exception as err:
                raise RuntimeError(f"failed to create cp in db: {err}") from err

        return CreateCPMaterialResponse(
            cp_id=material.cp_id,
            material_id=material.id,
            base_resp=BaseResp(code=SUCCESS_CODE, msg="创建成功"),
        )

    def _cp_exists(self, cp_id: int) -> bool:
        try:
            self.cp_repo.get_cp_by_id(cp_id)
        except RecordNotFoundError:
            return False
        except Exception as err:
            raise RuntimeError(f"failed to check if cp exists: {err}") from err
        return True

    def get_cp_material(self, req: GetCPMaterialRequest) -> GetCPMaterialResponse:
        """Return the requested material; failures are reported in the response."""
        logger.debug("GetCPMaterial request: %r", req)
        if req.cp_id <= 0:
            return GetCPMaterialResponse(
                base_resp=_failure("invalid parameter: cp_id must be positive: ")
            )
        try:
            material = self.material_repo.get_material_by_id(req.material_id)
        except Exception as err:
            return GetCPMaterialResponse(base_resp=_failure(str(err)))
        return GetCPMaterialResponse(
            cp_material=CPMaterial(
                material_id=material.id,
                cp_id=material.cp_id,
                cp_icon=material.cp_icon,
                cp_name=material.cp_name,
                verification_images=None,
                business_licenses=material.business_license,
                website=material.website,
                status=_as_status(material.status),
                review_comment=material.review_comment,
                create_time=int(material.create_ts.timestamp()),
                modify_time=int(material.modify_ts.timestamp()),
            ),
            base_resp=BaseResp(code=SUCCESS_CODE, msg="success"),
        )

    def review_cp_material(self, req: ReviewCPMaterialRequest) -> ReviewCPMaterialResponse:
        """Record a reviewer's pass or reject decision on a material."""
        if req.material_id <= 0:
            raise InvalidArgumentError("invalid parameter: material_id is required")
        if req.review_result == ReviewResult.UNSET:
            raise InvalidArgumentError(
                "invalid parameter: review_result must be Pass or Reject"
            )

        try:
            self.material_repo.get_material_by_id(req.material_id)
        except RecordNotFoundError as err:
            raise MaterialNotFoundError() from err

        status = (
            MaterialStatus.ONLINE
            if req.review_result == ReviewResult.PASS
            else MaterialStatus.REJECTED
        )
        remark = req.review_remark
        updates = {
            "status": int(status),
            "review_comment": remark.remark if remark else "",
            "operator": remark.operator if remark else "",
            "modify_ts": datetime.now(),
        }
        rows = self.material_repo.update_material(req.material_id, updates)
        if rows == 0:
            raise UpdateFailedError("update failed, zero rows affected")
        return ReviewCPMaterialResponse(base_resp=BaseResp(code=SUCCESS_CODE, msg="success"))

    def update_cp_material(self, req: UpdateCPMaterialRequest) -> UpdateCPMaterialResponse:
        """Change an editable material; refusals are reported in the response."""
        if req.material_id <= 0:
            return UpdateCPMaterialResponse(
                base_resp=_failure("invalid parameter: material_id is required")
            )
        info = req.cp_material
        if info is None:
            return UpdateCPMaterialResponse(
                base_resp=_failure("invalid parameter: cp_material data is missing")
            )
        if req.submit_mode == SubmitMode.UNSET:
            return UpdateCPMaterialResponse(
                base_resp=_failure("invalid parameter: submit_mode is required")
            )
        if not info.cp_name or not info.business_licenses:
            return UpdateCPMaterialResponse(
                base_resp=_failure("cp_name and business_license are required fields")
            )

        try:
            material = self.material_repo.get_material_by_id(req.material_id)
        except RecordNotFoundError:
            return UpdateCPMaterialResponse(base_resp=_failure("material not found"))

        if material.status in (MaterialStatus.REVIEWING, MaterialStatus.ONLINE):
            return UpdateCPMaterialResponse(
                base_resp=_failure("cannot update material that is in review or online")
            )

        updates: dict[str, object] = {
            "cp_icon": info.cp_icon,
            "cp_name": info.cp_name,
            "business_license": info.business_licenses,
            "website": info.website,
        }
        if info.verification_images is not None:
            updates["verification_images"] = _marshal_strings(info.verification_images)
        if req.submit_mode == SubmitMode.SUBMIT_DRAFT:
            updates["status"] = int(MaterialStatus.DRAFT)
        elif req.submit_mode == SubmitMode.SUBMIT_REVIEW:
            updates["status"] = int(MaterialStatus.REVIEWING)
        updates["modify_ts"] = datetime.now()

        try:
            self.material_repo.update_material(req.material_id, updates)
        except Exception as err:
            return UpdateCPMaterialResponse(base_resp=_failure(str(err)))

        return UpdateCPMaterialResponse(base_resp=BaseResp(code=SUCCESS_CODE, msg="success"))