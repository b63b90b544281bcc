"""LiftLog: workout templates, timed sessions and the sets logged in them."""
