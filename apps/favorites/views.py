from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.sharing.resources import ResourceKind
from apps.sharing.services import ResourceNotFoundError, AccessDeniedError
from apps.sharing.views import not_found_response

from .serializers import UserFavoriteSerializer, FavoriteToggleResponseSerializer
from .services import toggle_favorite, list_favorites, FavoriteConflictError


@extend_schema(
    request=None,
    responses={200: FavoriteToggleResponseSerializer},
    description="Toggle the favorite marker of the current user on a resource.",
    tags=['favorites'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def toggle(request, kind, resource_id):
    """Favorite or unfavorite a card, voucher or gift card."""
    if kind not in ResourceKind.values:
        return not_found_response(kind)

    try:
        favorited = toggle_favorite(user=request.user, kind=kind, resource_id=resource_id)
    except (ResourceNotFoundError, AccessDeniedError):
        return not_found_response(kind)
    except FavoriteConflictError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

    return Response({'is_favorite': favorited})


@extend_schema(
    parameters=[
        OpenApiParameter('kind', str, enum=ResourceKind.values, description='Filter by resource kind'),
    ],
    responses={200: UserFavoriteSerializer(many=True)},
    description="List the current user's favorites.",
    tags=['favorites'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_favorites(request):
    """Active favorites of the current user."""
    kind = request.query_params.get('kind')
    if kind and kind not in ResourceKind.values:
        return Response(
            {'error': f'Invalid kind. Must be one of: {ResourceKind.values}'},
            status=status.HTTP_400_BAD_REQUEST
        )

    favorites = list_favorites(user=request.user, kind=kind or None)
    return Response(UserFavoriteSerializer(favorites, many=True).data)
