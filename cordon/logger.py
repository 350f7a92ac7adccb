# Cordon CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for Cordon CLI applications."""
import logging

logger: logging.Logger = logging.getLogger("cordon")
