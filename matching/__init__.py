"""
University matching: engine, directory clients, AI counsellor and routes.
"""
