from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.principal import AuthenticatedPrincipal
from .serializers import (
    LedgerSerializer,
    MarkSettledInputSerializer,
    ReimbursementSerializer,
    SettlementResultSerializer,
)
from .services import get_ledger, get_reimbursement, mark_reimbursement_settled


@extend_schema(responses=LedgerSerializer)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def ledger(request):
    """
    Get the user's reimbursement ledger.

    GET /api/reimbursements/
    """
    principal = AuthenticatedPrincipal.from_request(request)
    return Response(LedgerSerializer(get_ledger(principal=principal)).data)


@extend_schema(responses=ReimbursementSerializer)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def reimbursement_detail(request, reimbursement_id):
    """
    Get a single reimbursement (debtor or creditor only).

    GET /api/reimbursements/{id}/
    """
    principal = AuthenticatedPrincipal.from_request(request)
    reimbursement = get_reimbursement(principal=principal, reimbursement_id=reimbursement_id)
    return Response(ReimbursementSerializer(reimbursement).data)


@extend_schema(request=MarkSettledInputSerializer, responses=SettlementResultSerializer)
@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def mark_paid(request, reimbursement_id):
    """
    Mark a reimbursement as settled.

    PATCH /api/reimbursements/{id}/mark-paid/
    Body: {"status": "paid", "payment_method_id": "<uuid>",
           "transaction_reference": "..."}
    """
    principal = AuthenticatedPrincipal.from_request(request)
    serializer = MarkSettledInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    result = mark_reimbursement_settled(
        principal=principal,
        reimbursement_id=reimbursement_id,
        status=data.get('status'),
        settled_at=data.get('settled_at'),
        payment_method_id=data.get('payment_method_id'),
        transaction_reference=data.get('transaction_reference'),
    )
    return Response(SettlementResultSerializer(result).data)
