from django.urls import path
from . import views

app_name = 'giftcards'

urlpatterns = [
    # GET    /api/gift-cards/total-balance/                     - Sum over owned cards
    path('total-balance/', views.total_balance, name='total-balance'),

    # GET    /api/gift-cards/{id}/balance/                      - Current balance
    path('<uuid:gift_card_id>/balance/', views.gift_card_balance, name='balance'),

    # GET    /api/gift-cards/{id}/transactions/                 - List transactions
    # POST   /api/gift-cards/{id}/transactions/                 - Record a debit
    path(
        '<uuid:gift_card_id>/transactions/',
        views.gift_card_transactions,
        name='transactions'
    ),

    # DELETE /api/gift-cards/{id}/transactions/{transaction_id}/ - Delete a debit
    path(
        '<uuid:gift_card_id>/transactions/<uuid:transaction_id>/',
        views.gift_card_transaction_detail,
        name='transaction-detail'
    ),
]
