"""
Embeddings Factory for Multi-Provider Support

Instantiates the appropriate LangChain embeddings client based on model identifier
and environment configuration.
Supports: OpenAI, Azure OpenAI, Google Gemini, and Ollama.
"""

import logging
import os
from typing import Any, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class EmbeddingConfig(BaseModel):
    """Configuration for embeddings initialization."""

    model: str = Field(
        default="text-embedding-3-small",
        description="Model identifier (e.g., 'text-embedding-3-small', 'azure/embeddings', 'ollama/nomic-embed-text')",
    )
    timeout: Optional[float] = Field(
        default=30.0,
        description="Request timeout in seconds",
    )
    max_retries: int = Field(
        default=2,
        ge=0,
        description="Maximum number of retries on API errors",
    )


def create_embeddings(
    model: str = "text-embedding-3-small",
    timeout: Optional[float] = 30.0,
    max_retries: int = 2,
    **kwargs: Any,
) -> Any:
    """
    Create an embeddings instance based on the model identifier.

    Model format examples:
    - OpenAI: "text-embedding-3-small", "text-embedding-3-large"
    - Azure OpenAI: "azure/<deployment-name>"
    - Google Gemini: "gemini/models/text-embedding-004"
    - Ollama: "ollama/nomic-embed-text", "ollama/mxbai-embed-large"

    Environment variables required:
    - OpenAI: OPENAI_API_KEY
    - Azure OpenAI: AZURE_OPENAI_API_KEY, AZURE_OPENAI_ENDPOINT, AZURE_OPENAI_API_VERSION (optional)
    - Google Gemini: GOOGLE_API_KEY
    - Ollama: No API key needed (runs locally), OLLAMA_BASE_URL (optional)

    Args:
        model: Model identifier string
        timeout: Request timeout in seconds
        max_retries: Maximum number of retries on API errors (OpenAI and Azure;
            Ollama and Gemini embeddings have no retry setting)
        **kwargs: Additional provider-specific parameters

    Returns:
        Embeddings instance (OpenAIEmbeddings, AzureOpenAIEmbeddings, etc.)

    Raises:
        ImportError: If required provider package is not installed
        ValueError: If required environment variables are missing

    Example:
        >>> embeddings = create_embeddings(model="text-embedding-3-small")
        >>> router = EmbeddingRouter.from_names_and_descriptions(
        >>>     {"billing": ["invoice", "refund"]}, embeddings
        >>> )
    """
    try:
        # Azure OpenAI
        if model.startswith("azure/"):
            from langchain_openai import AzureOpenAIEmbeddings

            deployment_name = model.replace("azure/", "")

            api_key = os.getenv("AZURE_OPENAI_API_KEY")
            endpoint = os.getenv("AZURE_OPENAI_ENDPOINT")
            api_version = os.getenv("AZURE_OPENAI_API_VERSION", "2024-02-15-preview")

            if not api_key:
                raise ValueError(
                    "Azure OpenAI requires AZURE_OPENAI_API_KEY environment variable"
                )
            if not endpoint:
                raise ValueError(
                    "Azure OpenAI requires AZURE_OPENAI_ENDPOINT environment variable"
                )

            logger.info(
                f"Creating Azure OpenAI embeddings with deployment: {deployment_name}, endpoint: {endpoint}"
            )

            return AzureOpenAIEmbeddings(
                azure_deployment=deployment_name,
                azure_endpoint=endpoint,
                api_key=api_key,
                api_version=api_version,
                timeout=timeout,
                max_retries=max_retries,
                **kwargs,
            )

        # Ollama (local models)
        elif model.startswith("ollama/"):
            from langchain_ollama import OllamaEmbeddings

            model_name = model.replace("ollama/", "")
            base_url = os.getenv("OLLAMA_BASE_URL")

            logger.info(f"Creating Ollama embeddings with model: {model_name}")

            if base_url:
                kwargs.setdefault("base_url", base_url)

            # Timeout goes to the underlying httpx client
            client_kwargs = {"timeout": timeout, **kwargs.pop("client_kwargs", {})}

            return OllamaEmbeddings(model=model_name, client_kwargs=client_kwargs, **kwargs)

        # Google Gemini
        elif model.startswith("gemini/"):
            from langchain_google_genai import GoogleGenerativeAIEmbeddings

            model_name = model.replace("gemini/", "")

            api_key = os.getenv("GOOGLE_API_KEY")
            if not api_key:
                raise ValueError(
                    "Google Gemini requires GOOGLE_API_KEY environment variable"
                )

            logger.info(f"Creating Google Gemini embeddings with model: {model_name}")

            request_options = {"timeout": timeout, **kwargs.pop("request_options", {})}

            return GoogleGenerativeAIEmbeddings(
                model=model_name,
                google_api_key=api_key,
                request_options=request_options,
                **kwargs,
            )

        # Default to OpenAI
        else:
            from langchain_openai import OpenAIEmbeddings

            api_key = os.getenv("OPENAI_API_KEY")
            if not api_key:
                raise ValueError("OpenAI requires OPENAI_API_KEY environment variable")

            logger.info(f"Creating OpenAI embeddings with model: {model}")

            return OpenAIEmbeddings(
                model=model,
                timeout=timeout,
                max_retries=max_retries,
                api_key=api_key,
                **kwargs,
            )

    except ImportError as e:
        error_msg = (
            f"Failed to import required LangChain package: {e}\n\n"
            f"Installation instructions:\n"
            f"  - For OpenAI / Azure OpenAI: pip install embedding-router[openai]\n"
            f"  - For Google Gemini: pip install embedding-router[gemini]\n"
            f"  - For Ollama: pip install embedding-router[ollama]"
        )
        logger.error(error_msg)
        raise ImportError(error_msg) from e


def create_embeddings_from_env() -> Any:
    """
    Create an embeddings instance using configuration from environment variables.

    Reads:
    - ROUTER_EMBEDDING_MODEL: Model identifier (default: "text-embedding-3-small")
    - ROUTER_EMBEDDING_TIMEOUT: Timeout in seconds (default: 30.0)
    - ROUTER_EMBEDDING_MAX_RETRIES: Max retries (default: 2)

    Returns:
        Embeddings instance configured from environment
    """
    config = EmbeddingConfig(
        model=os.getenv("ROUTER_EMBEDDING_MODEL", "text-embedding-3-small"),
        timeout=float(os.getenv("ROUTER_EMBEDDING_TIMEOUT", "30.0")),
        max_retries=int(os.getenv("ROUTER_EMBEDDING_MAX_RETRIES", "2")),
    )

    logger.info(f"Creating embeddings from environment: model={config.model}")

    return create_embeddings(
        model=config.model,
        timeout=config.timeout,
        max_retries=config.max_retries,
    )
