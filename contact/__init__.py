"""
Contact App

Handles contact form submissions from the public "Contact Us" form:
- Public submission endpoint with duplicate-submission guard
- Listing with pagination, status filter and search
- Status transitions (new, read, replied, archived)
- Deletion and summary statistics
"""
