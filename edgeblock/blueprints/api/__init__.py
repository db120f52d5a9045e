"""API Blueprint for EDGEBLOCK REST endpoints."""

from flask import Blueprint

api_bp = Blueprint('api', __name__)

from edgeblock.blueprints.api import routes  # noqa: E402, F401
from edgeblock.blueprints.api import blacklist  # noqa: E402, F401
