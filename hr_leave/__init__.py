"""HR leave balance service."""
