import os

# Keep test runs from writing log files
os.environ.setdefault("CHARGES_RETURN_LOG_FILE", "")

import pytest

SAMPLE_REPORT = """ACM001                     STATE BANK OF INDIA                        PAGE 1
BRANCH : 12345   MAIN BRANCH, HYDERABAD
            MONTHLY ABSTRACT OF CHARGES AS AT MAR 7, 2024
RUN DATE : 08/03/2024
ALL AMOUNTS IN INDIAN RUPEE
--------------------------------------------------------------------------------
HEAD                            PARTICULAR OF ENCLOSURE      AMOUNT       TOTAL
--------------------------------------------------------------------------------
RENT (OFFICE PREMISES)                                     1,250.50       3,000
TELEPHONE                                                    480.00    1,920.00
STATIONERY & PRINTING                                                    750.25
ELECTRICITY & GAS CHARGES                                  2,310.00    6,930.00
TELEPHONE                                                    520.00    1,920.00
MISCELLANEOUS                                                100.00      400.00
TOTAL CHARGES FOR THE MONTH                                4,660.50
TOTAL CHARGES UPTO PREVIOUS MONTH                                     13,000.25
BALANCE AS PER GENERAL LEDGER                             17,660.75
--------------------------------------------------------------------------------
NOTE: FIGURES ARE PROVISIONAL
I HEREBY CERTIFY THAT THE ABOVE CHARGES ARE CORRECT
REMARKS: NIL
*** END OF REPORT ***
"""


@pytest.fixture
def sample_report():
    """A complete ACM001 abstract as printed by the branch system."""
    return SAMPLE_REPORT
