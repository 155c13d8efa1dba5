"""Layout calculator for hand-cut dovetail joints."""
