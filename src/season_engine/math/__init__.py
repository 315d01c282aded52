"""Pure training-science math: stress, intensity, fueling, load, periodization."""
