from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.serializers import UserMinimalSerializer
from apps.accounts.services import UserNotFoundError

from .resources import ResourceKind, get_resource_type
from .serializers import (
    PermissionsSerializer,
    ShareSerializer,
    ShareCreateSerializer,
    ShareCapabilitiesInputSerializer,
    TransferOwnershipSerializer,
    OwnershipSerializer,
)
from .services import (
    check_access,
    require_permission,
    create_share,
    update_share,
    revoke_share,
    get_share,
    list_shares,
    get_shared_users,
    transfer_ownership,
    # Exceptions
    ResourceNotFoundError,
    AccessDeniedError,
    MissingCapabilityError,
    ShareNotFoundError,
    ShareAlreadyExistsError,
    CannotShareWithOwnerError,
    InvalidShareOperationError,
    CannotTransferToSelfError,
)


def not_found_response(kind):
    """
    404 used both for missing resources and for resources the caller
    can't see, so the two are indistinguishable.
    """
    if kind in ResourceKind.values:
        label = ResourceKind(kind).label
    else:
        label = 'Resource'
    return Response({'error': f'{label} not found'}, status=status.HTTP_404_NOT_FOUND)


def forbidden_response(error):
    return Response({'error': str(error)}, status=status.HTTP_403_FORBIDDEN)


def share_not_found_response():
    """Same body whether the share is missing or sits on a resource the caller can't see."""
    return Response({'error': 'Share not found'}, status=status.HTTP_404_NOT_FOUND)


def _require_owner(kind, user, resource_id):
    permissions = check_access(kind, user=user, resource_id=resource_id)
    require_permission(permissions, 'is_owner')
    return permissions


@extend_schema(
    responses={200: PermissionsSerializer},
    description="Get what the current user may do with a card, voucher or gift card.",
    tags=['sharing'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def resource_permissions(request, kind, resource_id):
    """Permissions of the current user on one resource."""
    if kind not in ResourceKind.values:
        return not_found_response(kind)

    try:
        permissions = check_access(kind, user=request.user, resource_id=resource_id)
    except (ResourceNotFoundError, AccessDeniedError):
        return not_found_response(kind)

    return Response(PermissionsSerializer(permissions).data)


@extend_schema(
    methods=['GET'],
    responses={200: ShareSerializer(many=True)},
    description="List the shares of a resource (owner only).",
    tags=['sharing'],
)
@extend_schema(
    methods=['POST'],
    request=ShareCreateSerializer,
    responses={201: ShareSerializer},
    description="Share a resource with another user by email (owner only).",
    tags=['sharing'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def resource_shares(request, kind, resource_id):
    """List or create shares of one resource."""
    if kind not in ResourceKind.values:
        return not_found_response(kind)

    try:
        _require_owner(kind, request.user, resource_id)
    except MissingCapabilityError:
        return forbidden_response('Only the owner can manage shares')
    except (ResourceNotFoundError, AccessDeniedError):
        return not_found_response(kind)

    context = {'request': request, 'kind': kind}

    if request.method == 'GET':
        shares = list_shares(kind=kind, resource_id=resource_id)
        return Response(ShareSerializer(shares, many=True, context=context).data)

    serializer = ShareCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    try:
        share = create_share(
            kind=kind,
            resource_id=resource_id,
            email=data['email'],
            capabilities={
                'can_edit': data['can_edit'],
                'can_delete': data['can_delete'],
                'can_edit_transactions': data['can_edit_transactions'],
            },
            created_by=request.user,
        )
    except ShareAlreadyExistsError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
    except (UserNotFoundError, CannotShareWithOwnerError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except ResourceNotFoundError:
        return not_found_response(kind)

    return Response(
        ShareSerializer(share, context=context).data,
        status=status.HTTP_201_CREATED
    )


@extend_schema(
    methods=['PATCH'],
    request=ShareCapabilitiesInputSerializer,
    responses={200: ShareSerializer},
    description="Update the capability bits of a card or gift card share (owner only).",
    tags=['sharing'],
)
@extend_schema(
    methods=['DELETE'],
    responses={204: None},
    description="Revoke a share (owner only).",
    tags=['sharing'],
)
@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def share_detail(request, kind, share_id):
    """Update or revoke one share."""
    if kind not in ResourceKind.values:
        return not_found_response(kind)

    try:
        share = get_share(kind=kind, share_id=share_id)
    except ShareNotFoundError:
        return share_not_found_response()

    resource_id = getattr(share, f'{get_resource_type(kind).share_field}_id')
    try:
        _require_owner(kind, request.user, resource_id)
    except MissingCapabilityError:
        return forbidden_response('Only the owner can manage shares')
    except (ResourceNotFoundError, AccessDeniedError):
        return share_not_found_response()

    if request.method == 'DELETE':
        try:
            revoke_share(kind=kind, share_id=share_id, revoked_by=request.user)
        except ShareNotFoundError:
            return share_not_found_response()
        return Response(status=status.HTTP_204_NO_CONTENT)

    serializer = ShareCapabilitiesInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        share = update_share(
            kind=kind,
            share_id=share_id,
            capabilities=dict(serializer.validated_data),
            updated_by=request.user,
        )
    except InvalidShareOperationError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except ShareNotFoundError:
        return share_not_found_response()

    return Response(ShareSerializer(share, context={'request': request, 'kind': kind}).data)


@extend_schema(
    request=TransferOwnershipSerializer,
    responses={200: OwnershipSerializer},
    description="Hand a resource over to another user by email (owner only). All shares are removed.",
    tags=['sharing'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def resource_transfer(request, kind, resource_id):
    """Transfer ownership of one resource."""
    if kind not in ResourceKind.values:
        return not_found_response(kind)

    serializer = TransferOwnershipSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        resource = transfer_ownership(
            kind=kind,
            resource_id=resource_id,
            new_owner_email=serializer.validated_data['email'],
            acting_user=request.user,
        )
    except MissingCapabilityError:
        return forbidden_response('Only the owner can transfer ownership')
    except (ResourceNotFoundError, AccessDeniedError):
        return not_found_response(kind)
    except (UserNotFoundError, CannotTransferToSelfError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(OwnershipSerializer({
        'id': resource.id,
        'kind': kind,
        'owner': resource.owner,
    }).data)


@extend_schema(
    parameters=[
        OpenApiParameter('search', str, description='Filter by email or display name'),
    ],
    responses={200: UserMinimalSerializer(many=True)},
    description="Users the current user has already shared something with.",
    tags=['sharing'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def shared_users(request):
    """Autocomplete source for the share form."""
    users = get_shared_users(
        owner=request.user,
        search=request.query_params.get('search', '')
    )
    return Response(UserMinimalSerializer(users, many=True).data)
