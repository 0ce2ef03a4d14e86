"""taxestimate: federal income tax estimates from extracted W-2 and 1099 figures."""

__version__ = "0.1.0"

from taxestimate.config.schema import ReturnInput as ReturnInput
from taxestimate.config.schema import Taxpayer as Taxpayer
from taxestimate.documents.aggregate import aggregate_documents as aggregate_documents
from taxestimate.documents.models import ExtractedDocument as ExtractedDocument
from taxestimate.documents.models import Form1099INTDocument as Form1099INTDocument
from taxestimate.documents.models import Form1099NECDocument as Form1099NECDocument
from taxestimate.documents.models import W2Document as W2Document
from taxestimate.documents.models import parse_extraction as parse_extraction
from taxestimate.forms.form_1040 import Form1040Summary as Form1040Summary
from taxestimate.forms.form_1040 import build_form_1040 as build_form_1040
from taxestimate.taxes.calculator import IncomeAggregate as IncomeAggregate
from taxestimate.taxes.calculator import TaxCalculator as TaxCalculator
from taxestimate.taxes.calculator import TaxOutcome as TaxOutcome
from taxestimate.taxes.calculator import calculate_taxes as calculate_taxes
from taxestimate.taxes.filing_status import FilingBucket as FilingBucket
from taxestimate.taxes.filing_status import FilingStatus as FilingStatus
from taxestimate.taxes.filing_status import bucket_for as bucket_for
from taxestimate.taxes.rate_table import RateTable as RateTable
from taxestimate.taxes.rate_table import TaxBracket as TaxBracket
from taxestimate.taxes.rate_table import load_rate_table as load_rate_table
from taxestimate.utils.exceptions import ConfigError as ConfigError
from taxestimate.utils.exceptions import DocumentError as DocumentError
from taxestimate.utils.exceptions import TaxEstimateError as TaxEstimateError
from taxestimate.utils.exceptions import UnknownFilingStatus as UnknownFilingStatus
