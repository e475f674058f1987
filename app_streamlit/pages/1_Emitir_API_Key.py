# --------------------------------------------------------------
# File: 1_Emitir_API_Key.py
# Description: Emite API keys nuevas con la configuración activa desde Streamlit.
# --------------------------------------------------------------

import streamlit as st

from core.api_key import API_KEY_HEADER, issue_api_key
from core.config import load_config
from core.errors import ConfigurationError, IssuanceError

# Presenta el título de la sección de emisión.
st.title("🗝️ Emitir API key")

try:
    config = load_config()
except ConfigurationError as exc:
    st.error(str(exc))
    st.stop()

# SECURITY: solo se muestran parámetros públicos, nunca el secreto ni el claro esperado.
st.table(
    {
        "Parámetro": ["Hash PBKDF2", "Iteraciones", "Etiqueta", "Nonce", "Salt", "Longitud"],
        "Valor": [
            config.hash_name,
            str(config.iterations),
            f"{config.tag_length * 8} bits",
            f"{config.nonce_length} bytes",
            f"{config.salt_length} bytes",
            f"{config.token_length} bytes",
        ],
    }
)

if st.button("Emitir", key="btn_issue"):
    try:
        token = issue_api_key(config)
    except IssuanceError as exc:
        st.error(str(exc))
    else:
        st.success("API key emitida. Cada emisión es distinta y de un solo uso lógico.")
        st.code(f"{API_KEY_HEADER}: {token}")
