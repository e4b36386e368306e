import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_portal"),
}

TOKEN_VERIFY_URL = os.getenv("TOKEN_VERIFY_URL", "http://54.46.24.34:5112/api/Tokenid/Verify")
TOKEN_VERIFY_TIMEOUT = float(os.getenv("TOKEN_VERIFY_TIMEOUT", "30"))

BPM_CONFIG = {
    "base_url": os.getenv("BPM_BASE_URL", ""),
    "api_token": os.getenv("BPM_API_TOKEN", ""),
    "environment": os.getenv("BPM_ENVIRONMENT", "PROD"),
    "timeout": float(os.getenv("BPM_TIMEOUT", "30")),
}

FTP_CONFIG = {
    "host": os.getenv("FTP_HOST", ""),
    "port": int(os.getenv("FTP_PORT", "21")),
    "username": os.getenv("FTP_USERNAME", ""),
    "password": os.getenv("FTP_PASSWORD", ""),
    "upload_path": os.getenv("FTP_UPLOAD_PATH", "/uploads/attachments/"),
}

SMTP_CONFIG = {
    "host": os.getenv("SMTP_HOST", ""),
    "port": int(os.getenv("SMTP_PORT", "587")),
    "username": os.getenv("SMTP_USERNAME", ""),
    "password": os.getenv("SMTP_PASSWORD", ""),
    "use_tls": bool(int(os.getenv("SMTP_USE_TLS", "1"))),
    "sender": os.getenv("SMTP_SENDER", ""),
    "sender_name": os.getenv("SMTP_SENDER_NAME", "HR System"),
}

VERIFICATION_CODE_MINUTES = int(os.getenv("VERIFICATION_CODE_MINUTES", "5"))
VERIFICATION_TEST_CODE = os.getenv("VERIFICATION_TEST_CODE", "")

DAY_WORK_HOURS = int(os.getenv("DAY_WORK_HOURS", "8"))
PERSONAL_LEAVE_HOURS = int(os.getenv("PERSONAL_LEAVE_HOURS", "112"))
SICK_LEAVE_HOURS = int(os.getenv("SICK_LEAVE_HOURS", "240"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

BUSINESS_CARD_BASE_URL = os.getenv("BUSINESS_CARD_BASE_URL", "https://app.panpi.com.tw/businesscard")

DIAGNOSTICS_ENABLED = bool(int(os.getenv("DIAGNOSTICS_ENABLED", "0")))
