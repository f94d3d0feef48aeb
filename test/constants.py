# Test Utility Constants

# Identity-provider subjects
VISITOR_USER_ID = 'user_visitor_1'
ANOTHER_VISITOR_USER_ID = 'user_visitor_2'
ADMIN_USER_ID = 'user_admin_1'

# Test Emails
VISITOR_EMAIL = 'visitor@museum.org'
ANOTHER_VISITOR_EMAIL = 'another_visitor@museum.org'
ADMIN_EMAIL = 'admin@museum.org'

# Test Names
VISITOR_NAME = 'Asha Rao'
ANOTHER_VISITOR_NAME = 'Vikram Sen'

# Catalog
DEFAULT_EXHIBITION_NAME = 'Ancient Scripts'
DEFAULT_SHOW_NAME = 'Night Sky'

# Prices in paise
ADULT_PRICE = 20000
CHILD_PRICE = 10000
STUDENT_PRICE = 12000
SENIOR_PRICE = 15000

DEFAULT_PRICES = {
    'adult': ADULT_PRICE,
    'child': CHILD_PRICE,
    'student': STUDENT_PRICE,
    'senior': SENIOR_PRICE,
}
