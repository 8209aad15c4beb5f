"""Parse and change AMD GPU clock/voltage states and read temperatures and fan modulation."""

__version__ = "0.1.0"
__all__ = ["clock_state", "errors", "monitor", "voltage"]