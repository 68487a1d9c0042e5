"""Web service for Cook Mode."""
