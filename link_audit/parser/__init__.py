"""link_audit.parser: HTML helpers shared by the extractor and the checker."""
