"""Allow ``python -m lang_audit``."""

from .main import run

if __name__ == "__main__":
    run()
