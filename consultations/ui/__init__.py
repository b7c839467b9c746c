"""CustomTkinter views for the Online Consultations client."""
