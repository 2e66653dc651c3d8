"""Terminal ray tracer package root."""
