"""
AI Endpoints.

Natural-language to SQL, free chat and the enterprise AI tools (optimize,
review, schema analysis). These endpoints answer 200 and report failures in
``errorMessage`` so clients can show the message next to the conversation.
"""

from typing import Dict, List

from fastapi import APIRouter

from dbchat_ai.ai import AVAILABLE_MODELS, AIService, ProviderConfigValidator, calculate_complexity, validate_query
from dbchat_ai.ai.providers import SERVICE_DISPLAY_NAMES
from dbchat_ai.core.logging_config import get_logger
from dbchat_ai.core.models.io import (
    AIMetricsResponse,
    AIQueryRequest,
    AIQueryResponse,
    AIValidationRequest,
    AIValidationResponse,
    ChatRequest,
    ChatResponse,
    EnterpriseQueryRequest,
    EnterpriseQueryResponse,
    ProviderStatusRead,
    QueryOptimizationRequest,
    QueryOptimizationResponse,
    QueryValidationRequest,
    QueryValidationResponse,
    SchemaAnalysisRequest,
    SchemaAnalysisResponse,
)
from dbchat_ai.server.core.config import settings
from dbchat_ai.server.services.deps import AIClientDep, DatabaseServiceDep, SQLGeneratorDep

logger = get_logger(__name__)

router = APIRouter(tags=["ai"])


@router.post(
    "/query",
    response_model=AIQueryResponse,
    summary="Generate and Run SQL",
    description="Translate a question into SQL for the target database and run it.",
)
async def generate_query(
    payload: AIQueryRequest, generator: SQLGeneratorDep, database_service: DatabaseServiceDep
) -> AIQueryResponse:
    """
    Answer a question with SQL and its results.

    The schema of the target database is discovered first and handed to the
    model. When the generated SQL cannot be executed the summary and query are
    still returned, with ``results`` left empty.
    """
    try:
        snapshot = await database_service.get_database_schema(payload.database_type, payload.connection_string)
        ai_query = await generator.generate_sql_query(
            payload.ai_model, payload.ai_service, payload.prompt, snapshot.schema_raw, payload.database_type
        )
    except Exception as e:
        logger.error(f"Query generation failed for {payload.ai_model} ({payload.ai_service}): {e}")
        return AIQueryResponse(error_message=str(e))

    response = AIQueryResponse(summary=ai_query.summary, query=ai_query.query)
    try:
        response.results = await database_service.execute_query(
            payload.database_type, payload.connection_string, ai_query.query
        )
    except Exception as e:
        logger.error(f"Executing generated SQL failed: {e}")
    return response


@router.post(
    "/chat",
    response_model=ChatResponse,
    summary="Chat with a Model",
    description="Send a conversation to a model and return its reply.",
)
async def chat(payload: ChatRequest, client: AIClientDep) -> ChatResponse:
    result = await client.get_enterprise_response(payload.messages, payload.ai_model, payload.ai_service)
    if not result.is_successful:
        return ChatResponse(error_message=result.error_message)
    return ChatResponse(response=result.content)


@router.get(
    "/models",
    response_model=Dict[str, List[str]],
    summary="List Available Models",
)
async def get_models() -> Dict[str, List[str]]:
    """Models offered to clients, keyed by service name."""
    return AVAILABLE_MODELS


@router.get(
    "/metrics",
    response_model=AIMetricsResponse,
    summary="AI Client Metrics",
    description="Usage counters of every (model, service) pair called since startup.",
)
async def get_metrics(client: AIClientDep) -> AIMetricsResponse:
    return AIMetricsResponse(clients=client.get_client_metrics())


@router.get(
    "/providers",
    response_model=List[ProviderStatusRead],
    summary="AI Provider Status",
    description="Whether each AI service has the setting it needs.",
)
async def get_providers() -> List[ProviderStatusRead]:
    status = ProviderConfigValidator.get_configuration_status(settings)
    return [
        ProviderStatusRead(
            service=service.value,
            display_name=SERVICE_DISPLAY_NAMES[service],
            configured=status[service],
            required_setting=ProviderConfigValidator.get_required_setting(service),
        )
        for service in AIService
    ]


@router.post(
    "/validate",
    response_model=QueryValidationResponse,
    summary="Validate SQL Locally",
    description="Heuristic safety checks and a complexity score, without calling a model.",
)
async def validate_sql(payload: QueryValidationRequest) -> QueryValidationResponse:
    result = validate_query(payload.sql_query, payload.database_type)
    return QueryValidationResponse(
        is_valid=result.is_valid,
        errors=result.errors,
        complexity_score=calculate_complexity(payload.sql_query),
    )


# Enterprise AI tools


@router.post(
    "/enterprise/query",
    response_model=EnterpriseQueryResponse,
    summary="Generate Enterprise SQL",
    description="Generate SQL together with performance, security and scalability notes.",
)
async def generate_enterprise_query(
    payload: EnterpriseQueryRequest, generator: SQLGeneratorDep, database_service: DatabaseServiceDep
) -> EnterpriseQueryResponse:
    """
    Generate SQL with an analysis of it.

    - **complexityLevel**: Expert, Advanced, Intermediate or Basic.
    - **enableCaching**: Serve identical requests from the result cache.
    - **enableValidation**: Run the local validator over the generated SQL.
    """
    try:
        snapshot = await database_service.get_database_schema(payload.database_type, payload.connection_string)
        result = await generator.generate_enterprise_query(
            payload.ai_model,
            payload.ai_service,
            payload.prompt,
            snapshot.schema_raw,
            payload.database_type,
            complexity_level=payload.complexity_level,
            enable_caching=payload.enable_caching,
            enable_validation=payload.enable_validation,
        )
    except Exception as e:
        logger.error(f"Enterprise query generation failed: {e}")
        return EnterpriseQueryResponse(error_message=str(e))
    return EnterpriseQueryResponse.model_validate(result.model_dump())


@router.post(
    "/enterprise/optimize",
    response_model=QueryOptimizationResponse,
    summary="Optimize SQL",
)
async def optimize_query(
    payload: QueryOptimizationRequest, generator: SQLGeneratorDep, database_service: DatabaseServiceDep
) -> QueryOptimizationResponse:
    """Suggest a faster rewrite of a statement for the target schema."""
    try:
        snapshot = await database_service.get_database_schema(payload.database_type, payload.connection_string)
        result = await generator.optimize_query(
            payload.ai_model,
            payload.ai_service,
            payload.sql_query,
            snapshot.schema_raw,
            payload.database_type,
            optimization_strategy=payload.optimization_strategy,
        )
    except Exception as e:
        logger.error(f"Query optimization failed: {e}")
        return QueryOptimizationResponse(error_message=str(e))
    return QueryOptimizationResponse.model_validate(result.model_dump())


@router.post(
    "/enterprise/analyze-schema",
    response_model=SchemaAnalysisResponse,
    summary="Analyze Schema",
)
async def analyze_schema(
    payload: SchemaAnalysisRequest, generator: SQLGeneratorDep, database_service: DatabaseServiceDep
) -> SchemaAnalysisResponse:
    """Review the design of the target schema."""
    try:
        snapshot = await database_service.get_database_schema(payload.database_type, payload.connection_string)
        result = await generator.analyze_schema(
            payload.ai_model,
            payload.ai_service,
            snapshot.schema_raw,
            payload.database_type,
            analysis_scope=payload.analysis_scope,
        )
    except Exception as e:
        logger.error(f"Schema analysis failed: {e}")
        return SchemaAnalysisResponse(error_message=str(e))
    return SchemaAnalysisResponse.model_validate(result.model_dump())


@router.post(
    "/enterprise/validate",
    response_model=AIValidationResponse,
    summary="Review SQL with AI",
)
async def validate_query_with_ai(
    payload: AIValidationRequest, generator: SQLGeneratorDep, database_service: DatabaseServiceDep
) -> AIValidationResponse:
    """Security and compliance review of a statement against the target schema."""
    try:
        snapshot = await database_service.get_database_schema(payload.database_type, payload.connection_string)
        result = await generator.validate_query_with_ai(
            payload.ai_model, payload.ai_service, payload.sql_query, snapshot.schema_raw, payload.database_type
        )
    except Exception as e:
        logger.error(f"AI query validation failed: {e}")
        return AIValidationResponse(is_valid=False, error_message=str(e))
    return AIValidationResponse.model_validate(result.model_dump())
