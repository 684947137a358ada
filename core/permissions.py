# core/permissions.py
from typing import Optional

from rest_framework.permissions import SAFE_METHODS, BasePermission

from barbeiros.models import Papel


def papel_de(user) -> Optional[str]:
    """ADMIN / RECEPCIONISTA / BARBEIRO, ou None. Superusuário conta como ADMIN."""
    if not user or not user.is_authenticated:
        return None
    if user.is_superuser:
        return Papel.ADMIN
    perfil = getattr(user, "perfil", None)
    return perfil.papel if perfil else None


def barbeiro_id_de(user) -> Optional[int]:
    perfil = getattr(user, "perfil", None) if user and user.is_authenticated else None
    return perfil.barbeiro_id if perfil else None


def is_admin(user) -> bool:
    return papel_de(user) == Papel.ADMIN


def is_equipe(user) -> bool:
    """Admin ou recepção."""
    return papel_de(user) in (Papel.ADMIN, Papel.RECEPCIONISTA)


def pode_ver_barbeiro(user, barbeiro_id) -> bool:
    """Admin/recepção veem todos; barbeiro só a si."""
    if is_equipe(user):
        return True
    return barbeiro_id is not None and barbeiro_id_de(user) == int(barbeiro_id)


def scope_queryset_by_role(qs, user, field_name: str = "barbeiro"):
    """
    Se usuário for BARBEIRO, restringe para registros em que <field_name> == barbeiro do usuário.
    ADMIN/RECEPCIONISTA veem tudo.
    """
    if is_equipe(user):
        return qs
    return qs.filter(**{f"{field_name}_id": barbeiro_id_de(user)})


class IsAdmin(BasePermission):
    message = "Acesso restrito ao administrador."

    def has_permission(self, request, view):
        return is_admin(request.user)


class IsEquipe(BasePermission):
    message = "Acesso restrito a administrador ou recepção."

    def has_permission(self, request, view):
        return is_equipe(request.user)


class IsAdminOrReadOnly(BasePermission):
    """Leitura para qualquer autenticado; escrita só admin."""
    message = "Acesso restrito ao administrador."

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return bool(request.user and request.user.is_authenticated)
        return is_admin(request.user)


class IsEquipeOrReadOnly(BasePermission):
    """Leitura para qualquer autenticado (escopo por papel na view); escrita só equipe."""
    message = "Acesso restrito a administrador ou recepção."

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return bool(request.user and request.user.is_authenticated)
        return is_equipe(request.user)
