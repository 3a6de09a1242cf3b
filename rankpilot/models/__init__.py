from rankpilot.models.user import User  # noqa: F401
from rankpilot.models.activity import Activity  # noqa: F401
