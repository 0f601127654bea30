from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.sharing.resources import ResourceKind
from apps.sharing.services import (
    check_gift_card_access,
    get_resource,
    resolve_access,
    ResourceNotFoundError,
    AccessDeniedError,
    MissingCapabilityError,
)
from apps.sharing.views import not_found_response, forbidden_response

from .serializers import (
    GiftCardBalanceSerializer,
    GiftCardTransactionSerializer,
    GiftCardTransactionCreateSerializer,
    InsufficientBalanceResponseSerializer,
    TotalBalancesSerializer,
)
from .services import (
    create_transaction,
    delete_transaction,
    list_transactions,
    get_total_balance,
    # Exceptions
    InvalidAmountError,
    InsufficientBalanceError,
    TransactionNotFoundError,
    LedgerStorageError,
)


def insufficient_balance_response(error):
    return Response(
        {
            'error': str(error),
            'available': f'{error.available:.2f}',
            'requested': f'{error.requested:.2f}',
            'currency': error.currency,
        },
        status=status.HTTP_422_UNPROCESSABLE_ENTITY
    )


@extend_schema(
    responses={200: GiftCardBalanceSerializer},
    description="Get the current balance of a gift card.",
    tags=['gift-cards'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def gift_card_balance(request, gift_card_id):
    """Current balance of a gift card the user can view."""
    try:
        gift_card = get_resource(kind=ResourceKind.GIFT_CARD, resource_id=gift_card_id)
        resolve_access(kind=ResourceKind.GIFT_CARD, user=request.user, resource=gift_card)
    except (ResourceNotFoundError, AccessDeniedError):
        return not_found_response(ResourceKind.GIFT_CARD)

    return Response(GiftCardBalanceSerializer(gift_card).data)


@extend_schema(
    methods=['GET'],
    responses={200: GiftCardTransactionSerializer(many=True)},
    description="List the active transactions of a gift card, newest first.",
    tags=['gift-cards'],
)
@extend_schema(
    methods=['POST'],
    request=GiftCardTransactionCreateSerializer,
    responses={
        201: GiftCardTransactionSerializer,
        422: InsufficientBalanceResponseSerializer,
    },
    description="Record a debit against a gift card.",
    tags=['gift-cards'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def gift_card_transactions(request, gift_card_id):
    """List or create gift card transactions."""
    if request.method == 'GET':
        try:
            check_gift_card_access(user=request.user, gift_card_id=gift_card_id)
        except (ResourceNotFoundError, AccessDeniedError):
            return not_found_response(ResourceKind.GIFT_CARD)

        transactions = list_transactions(gift_card_id=gift_card_id)
        return Response(GiftCardTransactionSerializer(transactions, many=True).data)

    serializer = GiftCardTransactionCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    try:
        txn = create_transaction(
            acting_user=request.user,
            gift_card_id=gift_card_id,
            amount=data['amount'],
            description=data.get('description', ''),
            transaction_date=data.get('transaction_date'),
        )
    except MissingCapabilityError as e:
        return forbidden_response(e)
    except (ResourceNotFoundError, AccessDeniedError):
        return not_found_response(ResourceKind.GIFT_CARD)
    except InvalidAmountError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except InsufficientBalanceError as e:
        return insufficient_balance_response(e)
    except LedgerStorageError as e:
        return Response({'error': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response(
        GiftCardTransactionSerializer(txn).data,
        status=status.HTTP_201_CREATED
    )


@extend_schema(
    responses={204: None},
    description="Delete a gift card transaction and restore its amount to the balance.",
    tags=['gift-cards'],
)
@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def gift_card_transaction_detail(request, gift_card_id, transaction_id):
    """Delete one transaction."""
    try:
        delete_transaction(
            acting_user=request.user,
            gift_card_id=gift_card_id,
            transaction_id=transaction_id,
        )
    except MissingCapabilityError as e:
        return forbidden_response(e)
    except (ResourceNotFoundError, AccessDeniedError):
        return not_found_response(ResourceKind.GIFT_CARD)
    except TransactionNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except LedgerStorageError as e:
        return Response({'error': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    responses={200: TotalBalancesSerializer},
    description="Sum of current balances over the gift cards the user owns, per currency.",
    tags=['gift-cards'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def total_balance(request):
    """Total balance of the user's own gift cards."""
    totals = [
        {'currency': currency, 'total_balance': total}
        for currency, total in get_total_balance(user=request.user).items()
    ]
    return Response(TotalBalancesSerializer({'totals': totals}).data)
