"""
Certificate Form - client for the student certificate service.

- form.py: CertificateForm controller (search, submit, update, delete)
- wizard.py: data entry / preview state
- models/: StudentRecord and Attachment
- services/: API client, certificate numbers, suggestions, preview
- logging_config.py: Structured logging configuration
- config.py: Settings read from the environment
"""

__version__ = "1.0.0"
