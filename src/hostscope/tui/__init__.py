"""Full-screen text interface."""
