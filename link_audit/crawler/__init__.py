"""link_audit.crawler: fetching seed pages and extracting their anchors."""
