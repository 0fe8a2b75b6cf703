"""
Field format rules shared by the form validator and the Contact model.

Plain pattern strings so the server can hand them to Django validators
and the client can compile them without importing Django.
"""

# Dot-atom local part, then hostname labels that neither start nor end
# with a hyphen, then an alphabetic top-level domain.
EMAIL_PATTERN = (
    r"^[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@(?:[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?\.)+[A-Za-z]{2,63}$"
)
EMAIL_MAX_LENGTH = 254

PHONE_PATTERN = r'^\+?[1-9][0-9]{0,15}$'
