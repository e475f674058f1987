# --------------------------------------------------------------
# File: test_api_key.py
# Description: Pruebas de emisión y verificación de API keys cifradas.
# --------------------------------------------------------------

import asyncio
import base64
import logging
from unittest import mock

import pytest

from core import api_key as api_key_module
from core.api_key import averify_api_key, issue_api_key, verify_api_key
from core.errors import IssuanceError
from core.models import RejectReason


def _flip_bit(token: str, index: int, bit: int = 0) -> str:
    raw = bytearray(base64.b64decode(token))
    raw[index] ^= 1 << bit
    return base64.b64encode(bytes(raw)).decode()


def test_reference_scenario(config):
    """La API key de referencia ocupa 60 bytes, verifica y truncada se rechaza."""
    token = issue_api_key(config)
    raw = base64.b64decode(token)
    assert len(raw) == 60 == config.token_length

    assert verify_api_key(token, config).accepted

    truncated = base64.b64encode(raw[:-1]).decode()
    result = verify_api_key(truncated, config)
    assert not result.accepted
    assert result.reason is RejectReason.MALFORMED


def test_issue_is_fresh_every_call(config):
    """Dos emisiones seguidas difieren y ambas son válidas."""
    first = issue_api_key(config)
    second = issue_api_key(config)
    assert first != second
    assert verify_api_key(first, config)
    assert verify_api_key(second, config)


@pytest.mark.parametrize("index, bit", [(0, 0), (7, 3), (15, 7), (16, 1), (31, 6)])
def test_tampered_ciphertext_is_rejected(config, index, bit):
    """Alterar un bit del texto cifrado o de la etiqueta falla la autenticación."""
    token = _flip_bit(issue_api_key(config), index, bit)
    result = verify_api_key(token, config)
    assert not result.accepted
    assert result.reason is RejectReason.AUTHENTICATION_FAILED


@pytest.mark.parametrize("index", [32, 43, 44, 59])
def test_tampered_nonce_or_salt_is_rejected(config, index):
    """Alterar el nonce o la salt también invalida la API key."""
    result = verify_api_key(_flip_bit(issue_api_key(config), index), config)
    assert result.reason is RejectReason.AUTHENTICATION_FAILED


def test_padded_token_is_rejected_without_decrypting(config):
    """Un byte extra se rechaza sin llegar a derivar la clave."""
    raw = base64.b64decode(issue_api_key(config)) + b"\x00"
    with mock.patch.object(api_key_module, "derive_key") as derive:
        result = verify_api_key(base64.b64encode(raw).decode(), config)
    derive.assert_not_called()
    assert result.reason is RejectReason.MALFORMED


def test_wrong_secret_is_rejected(config):
    """Una API key emitida con otro secreto no verifica."""
    other = config.model_copy(update={"secret": b"another-secret-value"})
    result = verify_api_key(issue_api_key(other), config)
    assert not result.accepted
    assert result.reason is RejectReason.AUTHENTICATION_FAILED


def test_plaintext_mismatch_is_rejected(config):
    """Etiqueta válida con otro claro de igual longitud se rechaza como mismatch."""
    other = config.model_copy(update={"expected_plaintext": b"expected-key-999"})
    result = verify_api_key(issue_api_key(other), config)
    assert not result.accepted
    assert result.reason is RejectReason.MISMATCH


@pytest.mark.parametrize("token", [None, "", "%%%"])
def test_missing_or_garbage_token(config, token):
    """Valores ausentes o basura no provocan excepciones."""
    result = verify_api_key(token, config)
    assert result.reason is RejectReason.MALFORMED


def test_truncated_tag_configuration_roundtrip(config):
    """Con etiqueta de 96 bits la API key mide 56 bytes y verifica."""
    short = config.model_copy(update={"tag_length": 12})
    token = issue_api_key(short)
    assert len(base64.b64decode(token)) == 56
    assert verify_api_key(token, short)
    assert verify_api_key(token, config).reason is RejectReason.MALFORMED


def test_sha512_configuration_roundtrip(config):
    """El hash de PBKDF2 debe coincidir entre emisor y verificador."""
    sha512 = config.model_copy(update={"hash_name": "SHA-512"})
    token = issue_api_key(sha512)
    assert verify_api_key(token, sha512)
    assert verify_api_key(token, config).reason is RejectReason.AUTHENTICATION_FAILED


def test_issue_wraps_derivation_errors(config):
    """Los fallos de derivación se propagan como IssuanceError."""
    weak = config.model_copy(update={"iterations": 10})
    with pytest.raises(IssuanceError):
        issue_api_key(weak)


def test_issue_wraps_rng_errors(config):
    """Un fallo del generador aleatorio no produce una API key parcial."""
    with mock.patch.object(api_key_module.os, "urandom", side_effect=OSError("rng")):
        with pytest.raises(IssuanceError):
            issue_api_key(config)


def test_rejection_log_has_no_key_material(config, caplog):
    """El log de rechazo incluye el motivo pero no la API key."""
    token = _flip_bit(issue_api_key(config), 0)
    with caplog.at_level(logging.INFO, logger="core.api_key"):
        verify_api_key(token, config)
    assert "authentication_failed" in caplog.text
    assert token not in caplog.text
    assert "test-secret-value" not in caplog.text


def test_async_verification(config):
    """La variante asíncrona devuelve el mismo resultado."""
    token = issue_api_key(config)

    async def _run():
        return await asyncio.gather(
            averify_api_key(token, config), averify_api_key("bad", config)
        )

    good, bad = asyncio.run(_run())
    assert good.accepted
    assert bad.reason is RejectReason.MALFORMED
