# core/exceptions.py
"""
Tratamento único de erros da API.

- Validação (serializers / RegraDeNegocio)     -> 400 {"message", "errors"}
- Violação de unicidade no banco              -> 409 {"message", "detail"}
- Falha do gateway Asaas                       -> 400/500 com o payload do gateway
"""
from __future__ import annotations

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from assinaturas.asaas import AsaasError
from core.erros import RegraDeNegocio

log = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    view = context.get("view")
    view_name = view.__class__.__name__ if view else "?"

    if isinstance(exc, IntegrityError):
        log.warning("[api] conflito de integridade em %s: %s", view_name, exc)
        return Response(
            {"message": "Registro duplicado ou em conflito.", "detail": str(exc)},
            status=status.HTTP_409_CONFLICT,
        )

    if isinstance(exc, AsaasError):
        http_status = (
            status.HTTP_400_BAD_REQUEST
            if exc.status_code and 400 <= exc.status_code < 500
            else status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        log.error("[api] falha no Asaas em %s (status=%s)", view_name, exc.status_code)
        return Response(
            {"message": str(exc), "error": exc.payload},
            status=http_status,
        )

    # regras de domínio levantam RegraDeNegocio / ValidationError do Django;
    # outros ValueError são erro de programação e viram 500
    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(exc.messages)
    elif isinstance(exc, RegraDeNegocio):
        exc = ValidationError([str(exc)])

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, ValidationError):
        errors = response.data
        message = "Dados inválidos."
        if isinstance(errors, list) and errors:
            message = str(errors[0])
        response.data = {"message": message, "errors": errors}
    elif isinstance(response.data, dict) and "detail" in response.data:
        response.data = {"message": str(response.data["detail"])}
    return response
