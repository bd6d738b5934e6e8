"""Built-in schema catalog: the known record types and their fields.

Each record type maps field name -> declaration, in the order the API
documents them (wildcard expansion follows this order). A declaration's
``type`` is a LogicalType or another RecordType; ``nested_model`` is set
where a field's logical type is ``dict`` but it can still be projected as a
record (choice fields returned as ``{code, description}``).
"""

from enum import Enum
from typing import Any, Dict, Optional, Union

from recordshape.kernel.schema import LogicalType as T


class RecordType(str, Enum):
    """Closed set of record types known to the built-in catalog."""

    CONTRACT = "Contract"
    IDV = "IDV"
    ENTITY = "Entity"
    RECIPIENT_PROFILE = "RecipientProfile"
    LOCATION = "Location"
    AGENCY = "Agency"
    DEPARTMENT = "Department"
    OFFICE = "Office"
    PERIOD_OF_PERFORMANCE = "PeriodOfPerformance"
    AWARD_REFERENCE = "AwardReference"
    COMPETITION = "Competition"
    LEGISLATIVE_MANDATES = "LegislativeMandates"
    TRANSACTION = "Transaction"
    SUBAWARDS_SUMMARY = "SubawardsSummary"
    CODE_DESCRIPTION = "CodeDescription"
    FORECAST = "Forecast"
    GRANT = "Grant"
    NOTICE = "Notice"
    OPPORTUNITY = "Opportunity"
    VEHICLE = "Vehicle"


R = RecordType


def _f(
    type_: Union[T, RecordType],
    *,
    required: bool = False,
    many: bool = False,
    nested: Optional[RecordType] = None,
) -> Dict[str, Any]:
    decl: Dict[str, Any] = {"type": type_.value, "is_optional": not required, "is_list": many}
    if nested is not None:
        decl["nested_model"] = nested.value
    return decl


# {code, description} choice objects
_CHOICE = _f(T.DICT, nested=R.CODE_DESCRIPTION)


CATALOG: Dict[RecordType, Dict[str, Dict[str, Any]]] = {
    R.CONTRACT: {
        "key": _f(T.STR, required=True),
        "piid": _f(T.STR),
        "award_date": _f(T.DATE),
        "description": _f(T.STR),
        "fiscal_year": _f(T.INT),
        "total_contract_value": _f(T.DECIMAL),
        "base_and_exercised_options_value": _f(T.DECIMAL),
        "obligated": _f(T.DECIMAL),
        "naics_code": _f(T.STR),
        "psc_code": _f(T.STR),
        "set_aside": _f(T.STR),
        "recipient": _f(R.RECIPIENT_PROFILE),
        "awarding_agency": _f(R.AGENCY),
        "funding_agency": _f(R.AGENCY),
        "awarding_office": _f(R.OFFICE),
        "funding_office": _f(R.OFFICE),
        "place_of_performance": _f(R.LOCATION),
        "period_of_performance": _f(R.PERIOD_OF_PERFORMANCE),
        "parent_award": _f(T.DICT, nested=R.AWARD_REFERENCE),
        "competition": _f(R.COMPETITION),
        "legislative_mandates": _f(R.LEGISLATIVE_MANDATES),
        "transactions": _f(R.TRANSACTION, many=True),
        "subawards_summary": _f(R.SUBAWARDS_SUMMARY),
        "last_modified": _f(T.DATETIME),
    },
    R.IDV: {
        "uuid": _f(T.STR),
        "key": _f(T.STR, required=True),
        "piid": _f(T.STR),
        "award_date": _f(T.DATE),
        "description": _f(T.STR),
        "fiscal_year": _f(T.INT),
        "total_contract_value": _f(T.DECIMAL),
        "base_and_exercised_options_value": _f(T.DECIMAL),
        "obligated": _f(T.DECIMAL),
        "idv_type": _CHOICE,
        "multiple_or_single_award_idv": _f(T.STR),
        "type_of_idc": _CHOICE,
        "period_of_performance": _f(R.PERIOD_OF_PERFORMANCE),
        "recipient": _f(R.RECIPIENT_PROFILE),
        "awarding_office": _f(R.OFFICE),
        "funding_office": _f(R.OFFICE),
        "place_of_performance": _f(R.LOCATION),
        "parent_award": _f(T.DICT, nested=R.AWARD_REFERENCE),
        "competition": _f(R.COMPETITION),
        "legislative_mandates": _f(R.LEGISLATIVE_MANDATES),
        "transactions": _f(R.TRANSACTION, many=True),
        "subawards_summary": _f(R.SUBAWARDS_SUMMARY),
        # Vehicle membership rollups (vehicle awardee listings)
        "title": _f(T.STR),
        "order_count": _f(T.INT),
        "idv_obligations": _f(T.DECIMAL),
        "idv_contracts_value": _f(T.DECIMAL),
    },
    R.ENTITY: {
        "key": _f(T.STR),
        "display_name": _f(T.STR),
        "uei": _f(T.STR, required=True),
        "cage_code": _f(T.STR),
        "legal_business_name": _f(T.STR),
        "dba_name": _f(T.STR),
        "business_types": _f(T.STR, many=True),
        "primary_naics": _f(T.STR),
        "naics_codes": _f(T.STR, many=True),
        "psc_codes": _f(T.STR, many=True),
        "email_address": _f(T.STR),
        "entity_url": _f(T.STR),
        "description": _f(T.STR),
        "capabilities": _f(T.STR),
        "keywords": _f(T.STR, many=True),
        "physical_address": _f(R.LOCATION),
        "mailing_address": _f(R.LOCATION),
        "federal_obligations": _f(T.DICT),
        "congressional_district": _f(T.STR),
    },
    R.RECIPIENT_PROFILE: {
        "uei": _f(T.STR),
        "cage_code": _f(T.STR),
        "display_name": _f(T.STR),
        "legal_business_name": _f(T.STR),
        "parent_uei": _f(T.STR),
        "parent_name": _f(T.STR),
        "business_types": _f(T.STR, many=True),
        "location": _f(R.LOCATION),
    },
    R.LOCATION: {
        "address_line1": _f(T.STR),
        "address_line2": _f(T.STR),
        "city": _f(T.STR),
        "state": _f(T.STR),
        "state_code": _f(T.STR),
        "zip_code": _f(T.STR),
        "zip": _f(T.STR),
        "zip4": _f(T.STR),
        "country": _f(T.STR),
        "country_code": _f(T.STR),
        "county": _f(T.STR),
        "congressional_district": _f(T.STR),
        "latitude": _f(T.FLOAT),
        "longitude": _f(T.FLOAT),
    },
    R.AGENCY: {
        "code": _f(T.STR, required=True),
        "name": _f(T.STR, required=True),
        "abbreviation": _f(T.STR),
        "department": _f(R.DEPARTMENT),
    },
    R.DEPARTMENT: {
        "code": _f(T.STR, required=True),
        "name": _f(T.STR, required=True),
        "abbreviation": _f(T.STR),
    },
    R.OFFICE: {
        "office_code": _f(T.STR),
        "office_name": _f(T.STR),
        "agency_code": _f(T.STR),
        "agency_name": _f(T.STR),
        "department_code": _f(T.STR),
        "department_name": _f(T.STR),
    },
    R.PERIOD_OF_PERFORMANCE: {
        "start_date": _f(T.DATE),
        "current_end_date": _f(T.DATE),
        "ultimate_completion_date": _f(T.DATE),
        "last_date_to_order": _f(T.DATE),
    },
    R.AWARD_REFERENCE: {
        "key": _f(T.STR, required=True),
        "piid": _f(T.STR),
    },
    R.COMPETITION: {
        "extent_competed": _CHOICE,
        "solicitation_procedures": _CHOICE,
        "other_than_full_and_open_competition": _CHOICE,
        "number_of_offers_received": _f(T.INT),
        "commercial_item_acquisition_procedures": _CHOICE,
    },
    R.LEGISLATIVE_MANDATES: {
        "clinger_cohen_act_planning": _f(T.BOOL),
        "construction_wage_rate_requirements": _f(T.BOOL),
        "labor_standards": _f(T.BOOL),
        "materials_supplies_articles_equipment": _f(T.BOOL),
        "other_statutory_authority": _f(T.STR),
    },
    R.TRANSACTION: {
        "modification_number": _f(T.STR),
        "transaction_date": _f(T.DATE),
        "obligated": _f(T.DECIMAL),
        "description": _f(T.STR),
        "action_type": _CHOICE,
    },
    R.SUBAWARDS_SUMMARY: {
        "count": _f(T.INT),
        "total_amount": _f(T.DECIMAL),
    },
    R.CODE_DESCRIPTION: {
        "code": _f(T.STR),
        "description": _f(T.STR),
    },
    R.FORECAST: {
        "id": _f(T.INT, required=True),
        "title": _f(T.STR, required=True),
        "description": _f(T.STR),
        "anticipated_award_date": _f(T.DATE),
        "fiscal_year": _f(T.INT),
        "naics_code": _f(T.STR),
        "status": _f(T.STR),
        "is_active": _f(T.BOOL),
        "agency": _f(T.STR),
    },
    R.GRANT: {
        "grant_id": _f(T.INT, required=True),
        "opportunity_number": _f(T.STR, required=True),
        "title": _f(T.STR, required=True),
        "agency_code": _f(T.STR),
        "status": _CHOICE,
        "description": _f(T.STR),
        "last_updated": _f(T.DATETIME),
    },
    R.NOTICE: {
        "notice_id": _f(T.STR, required=True),
        "title": _f(T.STR, required=True),
        "solicitation_number": _f(T.STR),
        "description": _f(T.STR),
        "posted_date": _f(T.DATE),
        "naics_code": _f(T.STR),
    },
    R.OPPORTUNITY: {
        "opportunity_id": _f(T.STR, required=True),
        "title": _f(T.STR, required=True),
        "solicitation_number": _f(T.STR),
        "description": _f(T.STR),
        "response_deadline": _f(T.DATETIME),
        "active": _f(T.BOOL),
        "naics_code": _f(T.STR),
        "psc_code": _f(T.STR),
    },
    R.VEHICLE: {
        "uuid": _f(T.STR, required=True),
        "solicitation_identifier": _f(T.STR, required=True),
        "agency_id": _f(T.STR),
        "organization_id": _f(T.STR),
        "vehicle_type": _CHOICE,
        "who_can_use": _CHOICE,
        "type_of_idc": _CHOICE,
        "contract_type": _CHOICE,
        "agency_details": _f(T.DICT),
        "descriptions": _f(T.STR, many=True),
        "fiscal_year": _f(T.INT),
        "solicitation_title": _f(T.STR),
        "solicitation_description": _f(T.STR),
        "solicitation_date": _f(T.DATE),
        "naics_code": _f(T.INT),
        "psc_code": _f(T.STR),
        "set_aside": _f(T.STR),
        "award_date": _f(T.DATE),
        "last_date_to_order": _f(T.DATE),
        "awardee_count": _f(T.INT),
        "order_count": _f(T.INT),
        "vehicle_obligations": _f(T.DECIMAL),
        "vehicle_contracts_value": _f(T.DECIMAL),
        "competition_details": _f(T.DICT, nested=R.COMPETITION),
    },
}
