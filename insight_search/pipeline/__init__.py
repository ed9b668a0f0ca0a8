"""Query triage and response synthesis pipeline."""
