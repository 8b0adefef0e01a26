"""
Nombres de elementos del formato XML de snapshot.
"""

ROOT_TAG = "positions"
POSITION_TAG = "position"
DEP_CODE_TAG = "depCode"
DEP_JOB_TAG = "depJob"
DESCRIPTION_TAG = "description"

# description NULL se representa con xsi:nil="true"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
XSI_NIL = f"{{{XSI_NAMESPACE}}}nil"
