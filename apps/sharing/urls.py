from django.urls import path
from . import views

app_name = 'sharing'

urlpatterns = [
    # GET    /api/access/{kind}/{id}/                 - Current user's permissions
    path(
        'access/<str:kind>/<uuid:resource_id>/',
        views.resource_permissions,
        name='resource-permissions'
    ),

    # GET    /api/shares/users/?search=                - Users already shared with
    path('shares/users/', views.shared_users, name='shared-users'),

    # GET    /api/shares/{kind}/{id}/                  - List shares (owner)
    # POST   /api/shares/{kind}/{id}/                  - Share with user by email (owner)
    path(
        'shares/<str:kind>/<uuid:resource_id>/',
        views.resource_shares,
        name='resource-shares'
    ),

    # POST   /api/shares/{kind}/{id}/transfer/         - Transfer ownership (owner)
    path(
        'shares/<str:kind>/<uuid:resource_id>/transfer/',
        views.resource_transfer,
        name='resource-transfer'
    ),

    # PATCH  /api/shares/{kind}/share/{share_id}/      - Update capabilities (owner)
    # DELETE /api/shares/{kind}/share/{share_id}/      - Revoke share (owner)
    path(
        'shares/<str:kind>/share/<uuid:share_id>/',
        views.share_detail,
        name='share-detail'
    ),
]
