"""Service layer.

Routes call exactly one function from these modules. Each function checks
the access policy first, then reads or writes the store.
"""
