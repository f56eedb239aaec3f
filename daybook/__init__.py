"""daybook: personal calendar events with per-day conflict detection."""
