"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

NOT_CLOCKED = "應刷未刷"
NORMAL_LABEL = "正常"
UNKNOWN_LABEL = "未知"

# Punch timestamps at or before this year are placeholders for "no punch".
MIN_REAL_PUNCH_YEAR = 1900

RECORD_DATE_FORMAT = "%Y/%m/%d"
PUNCH_DISPLAY_FORMAT = "%Y/%m/%d %H:%M:%S"
CLOCK_FORMAT = "%H:%M:%S"

DEFAULT_DAY_WORK_HOURS = 8
DEFAULT_PERSONAL_LEAVE_HOURS = 112
DEFAULT_SICK_LEAVE_HOURS = 240

PERSONAL_LEAVE_CODE = "PERSONAL"
PERSONAL_LEAVE_NAME = "事假"
SICK_LEAVE_CODE = "SICK"
SICK_LEAVE_NAME = "病假"
SPECIAL_LEAVE_CODE = "SPECIAL"
SPECIAL_LEAVE_NAME = "特休"
COMPENSATORY_LEAVE_CODE = "COMPENSATORY"
COMPENSATORY_LEAVE_NAME = "補休假"

DEFAULT_VERIFICATION_CODE_MINUTES = 5
VERIFICATION_CODE_DIGITS = 4
VERIFICATION_MAIL_SUBJECT = "【廣宇科技】薪資查詢驗證碼"

LEAVE_FORM_CODE = "PI_LEAVE_001"
BPM_SOURCE_SYSTEM = "APP"
ATTACHMENT_PATH_SEPARATOR = "||"
OVERTIME_FORM_CODE = "PI_OVERTIME_001"
OVERTIME_CODE = "SLC01"
BUSINESS_TRIP_FORM_CODE = "PI_BUSINESS_TRIP_001"
BUSINESS_TRIP_DEFAULT_STATUS = "待審核"
BUSINESS_TRIP_MAX_DAYS = 365
APPLIER_UNIT = "PI"

# eprocess on the overtime form: C = 轉補休, P = 加班費.
OVERTIME_PROCESS_TYPES = {"C": "0", "P": "1"}

DEFAULT_BUSINESS_CARD_BASE_URL = "https://app.panpi.com.tw/businesscard"
