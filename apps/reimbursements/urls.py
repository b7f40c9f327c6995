from django.urls import path
from . import views

app_name = 'reimbursements'

urlpatterns = [
    # GET    /api/reimbursements/                 - Ledger (owed to me / by me)
    # GET    /api/reimbursements/{id}/            - Reimbursement detail
    # PATCH  /api/reimbursements/{id}/mark-paid/  - Settle a reimbursement
    path('', views.ledger, name='ledger'),
    path('<uuid:reimbursement_id>/', views.reimbursement_detail, name='reimbursement-detail'),
    path('<uuid:reimbursement_id>/mark-paid/', views.mark_paid, name='mark-paid'),
]
