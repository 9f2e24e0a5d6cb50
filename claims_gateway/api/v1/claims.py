"""POST /v1/claims/* - financials, viability and workflow for a claim snapshot"""

import time
from datetime import date

from fastapi import APIRouter, Depends, Request

from claims_gateway.api.dependencies import get_legal_rules, get_request_id, get_today
from claims_gateway.api.v1.schemas import (
    ActionRequest,
    ActionResponse,
    AssessmentRequest,
    AssessmentResponse,
    ClaimRequest,
    ClaimSchema,
    EvaluationResponse,
    FinancialsResponse,
    WorkflowResponse,
)
from claims_gateway.domain.calculator import calculate_financials, interest_act, is_b2b
from claims_gateway.domain.models import AssessmentResult, ClaimFinancials, ClaimRecord
from claims_gateway.domain.rules import LegalRules
from claims_gateway.domain.viability import assess_claim_viability
from claims_gateway.domain.workflow import calculate_workflow_state, record_action
from claims_gateway.infrastructure.observability.logging import log_evaluation
from claims_gateway.infrastructure.observability.metrics import (
    record_assessment,
    record_claim_value,
    record_workflow,
)

router = APIRouter()


def _financials_response(claim: ClaimRecord, financials: ClaimFinancials) -> FinancialsResponse:
    response = FinancialsResponse.model_validate(financials)
    b2b = is_b2b(claim.claimant.type, claim.defendant.type)
    return response.model_copy(update={"interest_act": interest_act(b2b)})


def _failed_checks(assessment: AssessmentResult) -> list[str]:
    checks = {
        "limitation": assessment.limitation_check,
        "value": assessment.value_check,
        "solvency": assessment.solvency_check,
    }
    return [name for name, check in checks.items() if not check.passed]


@router.post("/claims/financials", response_model=FinancialsResponse)
def get_financials(
    body: ClaimRequest,
    today: date = Depends(get_today),
    rules: LegalRules = Depends(get_legal_rules),
):
    """Statutory interest, fixed compensation and court fee for a claim"""
    claim = body.claim.to_domain()
    financials = calculate_financials(claim, body.as_of or today, rules)
    record_claim_value(float(financials.total_claim_value))
    return _financials_response(claim, financials)


@router.post("/claims/assessment", response_model=AssessmentResponse)
def get_assessment(
    body: AssessmentRequest,
    request: Request,
    today: date = Depends(get_today),
    rules: LegalRules = Depends(get_legal_rules),
):
    """
    Viability checks: limitation period, small claims value, solvency.

    Failed checks are warnings; the caller decides whether to block.
    """
    as_of = body.as_of or today
    claim = body.claim.to_domain()
    financials = calculate_financials(claim, as_of, rules)

    assessment = assess_claim_viability(
        claim,
        as_of,
        total_interest=financials.interest.total_interest,
        compensation=financials.compensation,
        strength_score=body.strength_score,
        strength_analysis=body.strength_analysis,
        weaknesses=body.weaknesses,
        rules=rules,
    )

    record_assessment(assessment.is_viable, _failed_checks(assessment))
    log_evaluation(get_request_id(request), claim.id, "assessment", is_viable=assessment.is_viable)

    return AssessmentResponse.model_validate(assessment)


@router.post("/claims/workflow", response_model=WorkflowResponse)
def get_workflow(
    body: ClaimRequest,
    request: Request,
    today: date = Depends(get_today),
    rules: LegalRules = Depends(get_legal_rules),
):
    """Current stage, next action, due date and escalation signal"""
    claim = body.claim.to_domain()
    workflow = calculate_workflow_state(claim, body.as_of or today, rules=rules)

    record_workflow(workflow.current_stage.value, workflow.auto_escalate, workflow.urgency)
    log_evaluation(get_request_id(request), claim.id, "workflow", stage=workflow.current_stage.value)

    return WorkflowResponse.model_validate(workflow)


@router.post("/claims/evaluate", response_model=EvaluationResponse)
def evaluate_claim(
    body: ClaimRequest,
    request: Request,
    today: date = Depends(get_today),
    rules: LegalRules = Depends(get_legal_rules),
):
    """
    Full evaluation of a claim snapshot.

    Flow:
    1. Recompute interest, compensation and court fee
    2. Assess viability against the fresh figures
    3. Classify the workflow stage from the timeline
    """
    start_time = time.time()
    as_of = body.as_of or today
    claim = body.claim.to_domain()

    financials = calculate_financials(claim, as_of, rules)
    assessment = assess_claim_viability(
        claim,
        as_of,
        total_interest=financials.interest.total_interest,
        compensation=financials.compensation,
        rules=rules,
    )
    workflow = calculate_workflow_state(claim, as_of, interest=financials.interest, rules=rules)

    duration_ms = (time.time() - start_time) * 1000
    record_claim_value(float(financials.total_claim_value))
    record_assessment(assessment.is_viable, _failed_checks(assessment))
    record_workflow(workflow.current_stage.value, workflow.auto_escalate, workflow.urgency)
    log_evaluation(
        get_request_id(request),
        claim.id,
        "evaluate",
        stage=workflow.current_stage.value,
        is_viable=assessment.is_viable,
        duration_ms=duration_ms,
    )

    return EvaluationResponse(
        claim_id=claim.id,
        as_of=as_of,
        financials=_financials_response(claim, financials),
        assessment=AssessmentResponse.model_validate(assessment),
        workflow=WorkflowResponse.model_validate(workflow),
    )


@router.post("/claims/actions", response_model=ActionResponse)
def post_action(
    body: ActionRequest,
    request: Request,
    today: date = Depends(get_today),
    rules: LegalRules = Depends(get_legal_rules),
):
    """
    Record a step (reminder sent, LBA sent, settled...) against a claim.

    Returns the updated snapshot for the caller to store, and its new
    workflow state. Nothing is persisted here.
    """
    as_of = body.as_of or today
    updated = record_action(body.claim.to_domain(), body.action, as_of)
    workflow = calculate_workflow_state(updated, as_of, rules=rules)

    record_workflow(workflow.current_stage.value, workflow.auto_escalate, workflow.urgency)
    log_evaluation(get_request_id(request), updated.id, f"action:{body.action.value}", stage=workflow.current_stage.value)

    return ActionResponse(
        claim=ClaimSchema.model_validate(updated),
        workflow=WorkflowResponse.model_validate(workflow),
    )
