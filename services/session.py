"""Role lookup for the configured (already authenticated) server session."""
import logging
from typing import Optional

from domain.constants import ROLE_EVALUATOR, ROLE_GUIDANCE
from services.client import get_client
from services.errors import PortalError

logger = logging.getLogger(__name__)


def current_role() -> Optional[str]:
    """Return ``guidance``/``evaluator``, or None when nobody is signed in."""
    try:
        data = get_client().fetch_json('GET', '/auth-check')
    except PortalError as e:
        if e.status == 401:
            return None
        raise
    if not data.get('authenticated'):
        return None
    role = data.get('role')
    if role not in (ROLE_GUIDANCE, ROLE_EVALUATOR):
        logger.warning("Unsupported role from server: %s", role)
        return None
    return role
