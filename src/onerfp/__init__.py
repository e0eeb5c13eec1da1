"""1RFP community API: profiles, organizations, feed and social graph."""
