from os import getenv

class Settings:
    # Razorpay
    RAZORPAY_KEY_ID = getenv("RAZORPAY_KEY_ID", "rzp_test_key")
    RAZORPAY_KEY_SECRET = getenv("RAZORPAY_KEY_SECRET", "dev-secret-change-in-prod")
    RAZORPAY_API_URL = getenv("RAZORPAY_API_URL", "https://api.razorpay.com/v1")
    RAZORPAY_TIMEOUT = int(getenv("RAZORPAY_TIMEOUT", "15"))

    PAGE_PRICE = int(getenv("PAGE_PRICE", "19900"))  # en paise
    CURRENCY = getenv("CURRENCY", "INR")

    # Cloudinary
    CLOUDINARY_CLOUD_NAME = getenv("CLOUDINARY_CLOUD_NAME", "")
    CLOUDINARY_API_KEY = getenv("CLOUDINARY_API_KEY", "")
    CLOUDINARY_API_SECRET = getenv("CLOUDINARY_API_SECRET", "")
    CLOUDINARY_FOLDER = getenv("CLOUDINARY_FOLDER", "love-pages")
    MAX_UPLOAD_FILES = int(getenv("MAX_UPLOAD_FILES", "10"))

    # Serveur
    PORT = int(getenv("PORT", "5000"))
    CORS_ORIGINS = [o.strip() for o in getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    LOG_LEVEL = getenv("LOG_LEVEL", "INFO")

    # Expiration des pages
    RETENTION_DAYS = int(getenv("RETENTION_DAYS", "7"))
    REAPER_HOUR = int(getenv("REAPER_HOUR", "3"))  # tous les jours à 3h
    REAPER_MINUTE = int(getenv("REAPER_MINUTE", "0"))
    REAPER_ENABLED = getenv("REAPER_ENABLED", "true").lower() == "true"

settings = Settings()
