import os


def get_settings_module() -> str:
    # Lấy giá trị môi trường từ biến APP_ENV, mặc định là 'development'
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "store_timeclock.config.production"

    if env in {"test", "testing"}:
        return "store_timeclock.config.testing"

    # Mặc định trả về Development cho tất cả các trường hợp còn lại
    return "store_timeclock.config.development"
