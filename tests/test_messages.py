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
from cpcenter.types import BaseResp, CPMaterial, ReviewRemark, ReviewResult, SubmitMode


def test_create_request_defaults():
    req = CreateCPMaterialRequest()
    assert req.cp_material is None
    assert req.submit_mode is SubmitMode.UNSET


def test_create_request_holds_material():
    material = CPMaterial(cp_id=123, cp_name="Test CP", business_licenses="License ABC")
    req = CreateCPMaterialRequest(cp_material=material, submit_mode=SubmitMode.SUBMIT_DRAFT)
    assert req.cp_material.cp_id == 123
    assert req.cp_material.cp_name == "Test CP"
    assert req.submit_mode == SubmitMode.SUBMIT_DRAFT


def test_create_response_fields():
    resp = CreateCPMaterialResponse(cp_id=123, material_id=1, base_resp=BaseResp(code="0", msg="创建成功"))
    assert resp.cp_id == 123
    assert resp.material_id == 1
    assert resp.base_resp.code == "0"
    assert resp.base_resp.msg == "创建成功"


def test_update_request_defaults_and_fields():
    assert UpdateCPMaterialRequest().material_id == 0
    req = UpdateCPMaterialRequest(
        material_id=1,
        cp_material=CPMaterial(cp_name="Updated CP Name", business_licenses="Updated License"),
        submit_mode=SubmitMode.SUBMIT_REVIEW,
    )
    assert req.cp_material.business_licenses == "Updated License"
    assert req.submit_mode == SubmitMode.SUBMIT_REVIEW


def test_review_request_defaults():
    req = ReviewCPMaterialRequest()
    assert req.review_result is ReviewResult.UNSET
    assert req.review_remark is None
    assert req.material_id == 0


def test_review_request_with_remark():
    remark = ReviewRemark(remark="looks fine", operator="alice")
    req = ReviewCPMaterialRequest(material_id=1, review_result=ReviewResult.PASS, review_remark=remark)
    assert req.review_remark.operator == "alice"
    assert req.review_result == ReviewResult.PASS


def test_responses_equality_by_value():
    assert UpdateCPMaterialResponse(BaseResp("0", "success")) == UpdateCPMaterialResponse(BaseResp("0", "success"))
    assert ReviewCPMaterialResponse(BaseResp("0", "success")) != ReviewCPMaterialResponse(BaseResp("500", "success"))
    assert ReviewCPMaterialResponse().base_resp is None


def test_get_request_and_response():
    req = GetCPMaterialRequest(cp_id=123, material_id=1)
    assert (req.cp_id, req.material_id) == (123, 1)
    resp = GetCPMaterialResponse(cp_material=CPMaterial(material_id=1, cp_name="Test CP"))
    assert resp.cp_material.material_id == 1
    assert resp.base_resp is None