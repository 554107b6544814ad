from backend.app import app, PORT
from backend.config import API_HOST, TOKENOMICS_VARIANT
from backend.util.log import log_info


if __name__ == "__main__":
    log_info(f"[HTTP] Tokenomics API starting on {API_HOST}:{PORT} variant={TOKENOMICS_VARIANT}")
    app.run(host=API_HOST, port=PORT)
