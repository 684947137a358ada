# core/erros.py


class RegraDeNegocio(ValueError):
    """Violação de regra de domínio; a API responde 400 com a mensagem."""
