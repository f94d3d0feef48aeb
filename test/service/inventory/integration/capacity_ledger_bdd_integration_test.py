from pytest_bdd import scenarios


scenarios('capacity_ledger.feature')
