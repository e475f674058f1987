# --------------------------------------------------------------
# File: 2_Verificar_API_Key.py
# Description: Comprueba API keys recibidas y muestra el motivo interno de rechazo.
# --------------------------------------------------------------

import streamlit as st

from core.api_key import verify_api_key
from core.config import load_config
from core.errors import ConfigurationError

# Presenta el título de la sección de verificación.
st.title("🔎 Verificar API key")

try:
    config = load_config()
except ConfigurationError as exc:
    st.error(str(exc))
    st.stop()

token = st.text_area("Valor de la cabecera X-API-Key", key="verify_token")

if st.button("Verificar", disabled=not token, key="btn_verify"):
    result = verify_api_key(token.strip(), config)
    if result.accepted:
        st.success("API key válida.")
    else:
        # Diagnóstico solo para operadores: el servicio responde siempre 403.
        st.error(f"API key rechazada (motivo interno: {result.reason.value}).")
