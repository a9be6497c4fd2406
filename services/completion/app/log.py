import json
import logging

# Логгер JSON: одна строка на событие
def get_logger(name: str = "completion", level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if not logger.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter('%(message)s'))
        logger.addHandler(h)
    return logger

def event(**fields) -> str:
    return json.dumps(fields, ensure_ascii=False, default=str)
