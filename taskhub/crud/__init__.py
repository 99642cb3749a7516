from . import accounts, authentication, designations, projects, tasks, user_requests  # noqa: F401
