from django.urls import path
from . import views

app_name = 'favorites'

urlpatterns = [
    # GET    /api/favorites/                       - List favorites (?kind=)
    path('', views.my_favorites, name='list'),

    # POST   /api/favorites/{kind}/{id}/toggle/    - Toggle favorite
    path('<str:kind>/<uuid:resource_id>/toggle/', views.toggle, name='toggle'),
]
