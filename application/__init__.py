"""
Application Layer for the session composer.

This package contains:
- ports/: Abstract repository and collaborator interfaces
- use_cases/: Workflows coordinating domain logic and ports
- exceptions: Errors shared by the application and infrastructure layers
"""
