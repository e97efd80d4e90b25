"""link_audit.checker: status/title retrieval and link-text judgment."""
