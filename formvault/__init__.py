"""FormVault package initializer.

Form records with owned file attachments and one-time passcode verification.
"""
