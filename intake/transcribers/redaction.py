"""
PII redaction policy table

Static, per-backend lists of the entity categories each provider is asked to mask.
"""

# AssemblyAI: banking and card data plus national ID numbers only
ASSEMBLYAI_REDACTION_POLICIES: tuple[str, ...] = (
    "banking_information",
    "credit_card_number",
    "credit_card_expiration",
    "credit_card_cvv",
    "us_social_security_number",
)

# Redacted spans are replaced with the entity name, e.g. [CREDIT_CARD_NUMBER]
ASSEMBLYAI_REDACTION_SUBSTITUTION = "entity_name"

# Deepgram: financial, personal identifier, health and contact entities
DEEPGRAM_REDACTION_ENTITIES: tuple[str, ...] = (
    # financial
    "pci",
    "account_number",
    "routing_number",
    # personal identifiers
    "ssn",
    "passport_number",
    "driver_license",
    "dob",
    # health
    "medical_condition",
    "blood_type",
    # contact
    "email_address",
    "phone_number",
)
