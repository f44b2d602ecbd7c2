"""Application wiring: frame helper, channel pipeline, demo."""
