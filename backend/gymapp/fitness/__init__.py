"""Pure workout math: units, plates, timers, records."""
