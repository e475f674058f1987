# --------------------------------------------------------------
# File: Home.py
# Description: Define la página principal de Streamlit con el resumen del esquema.
# --------------------------------------------------------------

import streamlit as st

# Configura los metadatos de la página principal de la aplicación.
st.set_page_config(page_title="API Key Console", page_icon="🔐", layout="centered")

# Presenta el nombre del producto y su propósito general.
st.title("🔐 API Key Console")
st.write(
    "Consola de operador para emitir y comprobar API keys cifradas con "
    "PBKDF2 + AES-GCM (cabecera `X-API-Key`)."
)
st.info(
    "Los parámetros se leen del entorno o del fichero `.env`: API_KEY_SECRET, "
    "API_KEY_CIPHER, PBKDF2_ITERATIONS, GCM_TAG_LENGTH, API_KEY_IV_LENGTH y "
    "API_KEY_SALT_LENGTH."
)
