from __future__ import annotations

import secrets

from ..core.constants import API_TOKEN_BYTES, ID_RANDOM_BYTES, TRAINEE_CODE_LENGTH


def gen_id(prefix: str) -> str:
    """Opaque record id, e.g. ``t_9f2c0d51a3b4e6f7``."""
    return f"{prefix}_{secrets.token_hex(ID_RANDOM_BYTES)}"


def gen_trainee_code() -> str:
    return secrets.token_hex(TRAINEE_CODE_LENGTH // 2).upper()


def gen_api_token() -> str:
    return secrets.token_urlsafe(API_TOKEN_BYTES)
