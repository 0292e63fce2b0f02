import os

DATABASE_URL = (os.getenv("DATABASE_URL") or "").replace("postgres://", "postgresql://", 1)
SQLALCHEMY_DATABASE_URI = DATABASE_URL
SQLALCHEMY_TRACK_MODIFICATIONS = False

SECRET_KEY = os.getenv("SECRET_KEY")

# Tic-Tac-Toe
TIC_TAC_TOE_DEFAULT_SIZE = int(os.getenv("TIC_TAC_TOE_DEFAULT_SIZE", "3"))
TIC_TAC_TOE_SCOREBOARD_LIMIT = int(os.getenv("TIC_TAC_TOE_SCOREBOARD_LIMIT", "10"))

# Jinja2 whitespace control - prevents unwanted line breaks in rendered HTML
JINJA2_TRIM_BLOCKS = True
JINJA2_LSTRIP_BLOCKS = True
