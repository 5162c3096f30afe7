"""Flow networks and weight-label rendering."""
