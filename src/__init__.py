"""Flag review analyzer: compare agent and QA flags in review exports."""
