"""HTTP surface: routing, bot gating and preview composition."""
