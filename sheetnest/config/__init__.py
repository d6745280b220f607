"""SheetNest configuration."""
