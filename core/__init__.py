# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package sits between the HTTP layer and the media package:
# - models/: Pydantic schemas for the API contract
# - services/: Media map workflows shared by the CLI and the admin API
#
# Code in this package should NOT import from FastAPI.
# This keeps the logic testable and reusable.
# =============================================================================
