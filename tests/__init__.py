# Test package for Online Consultations
