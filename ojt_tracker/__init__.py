"""OJT Hours Tracker API."""
