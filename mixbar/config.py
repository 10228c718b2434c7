import os

# x-Music Bar runtime configuration
# Product-tuning constants, overridable per installation via environment.

# Softmax temperature: higher sharpens the pour toward the best-matching
# ingredients, lower flattens it toward an even split.
SOFTMAX_SIGMA = float(os.getenv("MIXBAR_SOFTMAX_SIGMA", "12.0"))

# Total volume follows Texture: short drink at T=0, long drink at T=1
VOLUME_MIN_ML = float(os.getenv("MIXBAR_VOLUME_MIN_ML", "60.0"))
VOLUME_MAX_ML = float(os.getenv("MIXBAR_VOLUME_MAX_ML", "150.0"))

# Pours below this amount are dropped from the recipe card
MIN_POUR_ML = float(os.getenv("MIXBAR_MIN_POUR_ML", "1.0"))

# Optional JSON catalog replacing the built-in 15 ingredients
CATALOG_PATH = os.getenv("MIXBAR_CATALOG_PATH") or None

# Shared record written by the audience surface
RECORD_KEY = os.getenv("MIXBAR_RECORD_KEY", "sabit/current")

# SSE keep-alive period (seconds)
HEARTBEAT_SECONDS = float(os.getenv("MIXBAR_HEARTBEAT_SECONDS", "15"))

HOST = os.getenv("MIXBAR_HOST", "0.0.0.0")
PORT = int(os.getenv("MIXBAR_PORT", "8000"))
LOG_LEVEL = os.getenv("MIXBAR_LOG_LEVEL", "INFO")
