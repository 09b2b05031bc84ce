import hashlib
import logging
import secrets
import string

PASSWORD_LENGTH = 128
PASSWORD_HASH_ITERATIONS = 4096
PASSWORD_HASH_LENGTH = 32


def setup_logger(logger_name: str, level: int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    logger.propagate = False

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                                  datefmt='%d-%b-%y %H:%M:%S')
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level=level)
    console_handler.setFormatter(formatter)

    if not logger.handlers:
        logger.addHandler(console_handler)
    else:
        for handler in logger.handlers:
            handler.setLevel(level)

    return logger


def generate_password(length: int = PASSWORD_LENGTH) -> str:
    alphabet = string.ascii_letters + string.digits

    return ''.join(secrets.choice(alphabet) for _ in range(length))


def derive_password_hash(password: str, salt: str) -> bytes:
    """PBKDF2-HMAC-SHA256 of the password, salted with e.g. a namespace UID."""
    return hashlib.pbkdf2_hmac(
        'sha256',
        password.encode('utf-8'),
        salt.encode('utf-8'),
        PASSWORD_HASH_ITERATIONS,
        dklen=PASSWORD_HASH_LENGTH,
    )
