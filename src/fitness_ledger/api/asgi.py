"""ASGI entrypoint for the fitness ledger API."""

from fitness_ledger.api.app import create_app
from fitness_ledger.containers import build_container

app = create_app(build_container())
