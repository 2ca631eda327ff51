"""
Shared module for cross-cutting concerns of the REST API.

STRUCTURE:
- shared.security: Authentication
  - auth.py: JWT verification, current_user_context

- shared.infrastructure: Database and request tracing
  - db.py: SQLAlchemy sessions, safe_commit()
  - correlation.py: X-Request-ID middleware and logging filter

- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging
  - constants.py: Role, OrderStatus, report labels

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging and reason codes
  - money.py: Decimal currency helpers
  - validators.py: Query/config parsing
  - schemas.py: Response schemas

IMPORT EXAMPLES:
    from shared.security.auth import verify_jwt, current_user_context
    from shared.infrastructure.db import get_db
    from shared.config.settings import settings
    from shared.config.constants import Role, OrderStatus
    from shared.utils.exceptions import ForbiddenError, ValidationError
"""
