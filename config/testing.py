import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_portal_test"),
}

TOKEN_VERIFY_URL = "http://token-verify.test/api/Tokenid/Verify"

BPM_CONFIG = {"base_url": "http://bpm.test/api", "api_token": "test-token", "environment": "TEST"}
FTP_CONFIG = {"host": "ftp.test", "username": "test", "password": "test"}
SMTP_CONFIG = {"host": "smtp.test", "port": 25, "use_tls": False, "sender": "hr@example.test"}

VERIFICATION_CODE_MINUTES = 5
VERIFICATION_TEST_CODE = "0000"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

BUSINESS_CARD_BASE_URL = "https://cards.example.test"
DIAGNOSTICS_ENABLED = True
