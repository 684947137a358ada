# barbeiros/api_urls.py
from django.urls import path
from . import api

app_name = "barbeiros"

urlpatterns = [
    path("auth/login/", api.LoginView.as_view(), name="login"),
    path("auth/logout/", api.LogoutView.as_view(), name="logout"),
    path("auth/me/", api.MeView.as_view(), name="me"),
    path("auth/change-password/", api.TrocarSenhaView.as_view(), name="change_password"),
    path("usuarios/", api.UsuarioCreate.as_view(), name="usuarios"),

    path("barbeiros/", api.BarbeiroListCreate.as_view(), name="list_create"),
    path("barbeiros/<int:pk>/", api.BarbeiroRetrieveUpdateDestroy.as_view(), name="retrieve_update_destroy"),
    path("barbeiros/<int:pk>/toggle-ativo/", api.BarbeiroToggleAtivo.as_view(), name="toggle_ativo"),
]
