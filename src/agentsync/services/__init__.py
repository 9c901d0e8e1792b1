"""Service layer: pipeline orchestration returning ServiceResult."""
