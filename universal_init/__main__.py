"""Allow ``python -m universal_init``."""
from universal_init.cli import app

app()
