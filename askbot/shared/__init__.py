"""Models and storage shared by the relay and the admin panel."""
