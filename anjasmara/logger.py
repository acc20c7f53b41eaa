"""
module: logger.py
description: loguru logging setup (console + rotating file)
"""
import os

from loguru import logger

from .config import log_dir

LOG_DIR = log_dir()
if LOG_DIR:
    os.makedirs(LOG_DIR, exist_ok=True)
    logger.add(f"{LOG_DIR}/app.log", rotation="1 week", encoding="utf-8", level="INFO")
