"""Engine settings and default shape strings."""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

ENV_PREFIX = "RECORDSHAPE_"


class EngineSettings(BaseModel):
    """Settings for a ShapeEngine (parser cache, descriptor cache, unflatten joiner)."""
    parser_cache_enabled: bool = True
    descriptor_cache_enabled: bool = True
    descriptor_cache_size: int = Field(128, ge=1)
    max_depth: int = Field(32, ge=1, description="Maximum nesting depth of a resolved shape")
    joiner: str = Field(".", description="Separator of flat payload keys")

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("joiner")
    @classmethod
    def validate_joiner(cls, v: str) -> str:
        if not v:
            raise ValueError("joiner must be a non-empty string")
        return v

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineSettings":
        """Build settings from RECORDSHAPE_* environment variables.

        Unset variables keep their defaults; pydantic performs the coercion
        ("false", "0", "256", ...) and validation.

        Example:
            RECORDSHAPE_DESCRIPTOR_CACHE_SIZE=256
            RECORDSHAPE_PARSER_CACHE_ENABLED=false
        """
        env = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            key = f"{ENV_PREFIX}{name.upper()}"
            if key in env:
                values[name] = env[key]
        return cls(**values)


class ShapeDefaults:
    """Default shape strings for the record types the API serves.

    Every default resolves against the built-in catalog.
    """

    CONTRACTS_MINIMAL = "key,piid,award_date,recipient(display_name),description,total_contract_value"

    ENTITIES_MINIMAL = "uei,legal_business_name,cage_code,business_types"

    ENTITIES_COMPREHENSIVE = (
        "uei,legal_business_name,dba_name,cage_code,business_types,primary_naics,"
        "naics_codes,psc_codes,email_address,entity_url,description,capabilities,"
        "keywords,physical_address,mailing_address,federal_obligations,"
        "congressional_district"
    )

    FORECASTS_MINIMAL = "id,title,anticipated_award_date,fiscal_year,naics_code,status"

    OPPORTUNITIES_MINIMAL = "opportunity_id,title,solicitation_number,response_deadline,active"

    NOTICES_MINIMAL = "notice_id,title,solicitation_number,posted_date"

    GRANTS_MINIMAL = "grant_id,opportunity_number,title,status(*),agency_code"

    IDVS_MINIMAL = (
        "key,piid,award_date,recipient(display_name,uei),description,"
        "total_contract_value,obligated,idv_type"
    )

    IDVS_COMPREHENSIVE = (
        "key,piid,award_date,description,fiscal_year,total_contract_value,"
        "base_and_exercised_options_value,obligated,"
        "idv_type,multiple_or_single_award_idv,type_of_idc,"
        "period_of_performance(start_date,last_date_to_order),"
        "recipient(display_name,legal_business_name,uei,cage_code),"
        "awarding_office(*),funding_office(*),place_of_performance(*),parent_award(key,piid),"
        "competition(*),legislative_mandates(*),transactions(*),subawards_summary(*)"
    )

    VEHICLES_MINIMAL = (
        "uuid,solicitation_identifier,organization_id,awardee_count,order_count,"
        "vehicle_obligations,vehicle_contracts_value,solicitation_title,solicitation_date"
    )

    VEHICLES_COMPREHENSIVE = (
        "uuid,solicitation_identifier,agency_id,organization_id,vehicle_type,who_can_use,"
        "solicitation_title,solicitation_description,solicitation_date,naics_code,psc_code,set_aside,"
        "fiscal_year,award_date,last_date_to_order,awardee_count,order_count,vehicle_obligations,"
        "vehicle_contracts_value,type_of_idc,contract_type,competition_details(*)"
    )

    VEHICLE_AWARDEES_MINIMAL = (
        "uuid,key,piid,award_date,title,order_count,idv_obligations,idv_contracts_value,"
        "recipient(display_name,uei)"
    )


# (record type, shape) for every default shape
DEFAULT_SHAPES = {
    "CONTRACTS_MINIMAL": ("Contract", ShapeDefaults.CONTRACTS_MINIMAL),
    "ENTITIES_MINIMAL": ("Entity", ShapeDefaults.ENTITIES_MINIMAL),
    "ENTITIES_COMPREHENSIVE": ("Entity", ShapeDefaults.ENTITIES_COMPREHENSIVE),
    "FORECASTS_MINIMAL": ("Forecast", ShapeDefaults.FORECASTS_MINIMAL),
    "OPPORTUNITIES_MINIMAL": ("Opportunity", ShapeDefaults.OPPORTUNITIES_MINIMAL),
    "NOTICES_MINIMAL": ("Notice", ShapeDefaults.NOTICES_MINIMAL),
    "GRANTS_MINIMAL": ("Grant", ShapeDefaults.GRANTS_MINIMAL),
    "IDVS_MINIMAL": ("IDV", ShapeDefaults.IDVS_MINIMAL),
    "IDVS_COMPREHENSIVE": ("IDV", ShapeDefaults.IDVS_COMPREHENSIVE),
    "VEHICLES_MINIMAL": ("Vehicle", ShapeDefaults.VEHICLES_MINIMAL),
    "VEHICLES_COMPREHENSIVE": ("Vehicle", ShapeDefaults.VEHICLES_COMPREHENSIVE),
    "VEHICLE_AWARDEES_MINIMAL": ("IDV", ShapeDefaults.VEHICLE_AWARDEES_MINIMAL),
}
