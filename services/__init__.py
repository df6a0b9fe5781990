"""Services for Rehab Estimator: Gemini transport, response parsing and deal math."""
