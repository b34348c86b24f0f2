"""Keyspace and column family DDL routes."""

from typing import Optional

from fastapi import APIRouter, Depends, status

from storenode.auth import get_current_user
from storenode.repositories.schema_repository import Keyspace
from storenode.schemas.keyspaces import (
    AddColumnFamilyRequest,
    AddKeyspaceRequest,
    ColumnFamilyResponse,
    KeyspaceResponse,
    ListKeyspacesResponse,
)
from storenode.services.schema_service import SchemaService

router = APIRouter(prefix="/keyspaces", tags=["Schema"])


def _keyspace_response(keyspace: Keyspace) -> KeyspaceResponse:
    return KeyspaceResponse(
        name=keyspace.name,
        strategy_class=keyspace.strategy_class,
        strategy_options=keyspace.strategy_options,
        column_families=[
            ColumnFamilyResponse(
                keyspace=cf.keyspace,
                name=cf.name,
                binary_columns=cf.binary_columns,
            )
            for cf in keyspace.column_families
        ],
    )


@router.get("", response_model=ListKeyspacesResponse)
async def describe_keyspaces(current_user: Optional[str] = Depends(get_current_user)):
    """List every keyspace with its column families."""
    keyspaces = SchemaService().list_keyspaces()
    return ListKeyspacesResponse(keyspaces=[_keyspace_response(ks) for ks in keyspaces])


@router.post("", response_model=KeyspaceResponse, status_code=status.HTTP_201_CREATED)
async def add_keyspace(
    request: AddKeyspaceRequest,
    current_user: Optional[str] = Depends(get_current_user),
):
    """
    Create a keyspace.

    Raises:
        - 409: Keyspace already exists (code ALREADY_EXISTS)
    """
    keyspace = SchemaService().add_keyspace(
        name=request.name,
        strategy_class=request.strategy_class,
        strategy_options=request.strategy_options,
    )
    return _keyspace_response(keyspace)


@router.get("/{keyspace}", response_model=KeyspaceResponse)
async def describe_keyspace(keyspace: str, current_user: Optional[str] = Depends(get_current_user)):
    """
    Describe one keyspace.

    Raises:
        - 404: Keyspace does not exist (code KEYSPACE_NOT_FOUND)
    """
    return _keyspace_response(SchemaService().describe_keyspace(keyspace))


@router.delete("/{keyspace}", status_code=status.HTTP_204_NO_CONTENT)
async def drop_keyspace(keyspace: str, current_user: Optional[str] = Depends(get_current_user)):
    """
    Drop a keyspace and everything in it.

    Raises:
        - 404: Keyspace does not exist (code KEYSPACE_NOT_FOUND)
    """
    SchemaService().drop_keyspace(keyspace)


@router.post(
    "/{keyspace}/column-families",
    response_model=ColumnFamilyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_column_family(
    keyspace: str,
    request: AddColumnFamilyRequest,
    current_user: Optional[str] = Depends(get_current_user),
):
    """
    Create a column family.

    Raises:
        - 404: Keyspace does not exist
        - 409: Column family already exists (code ALREADY_EXISTS)
    """
    column_family = SchemaService().add_column_family(keyspace, request.name, request.binary_columns)
    return ColumnFamilyResponse(
        keyspace=column_family.keyspace,
        name=column_family.name,
        binary_columns=column_family.binary_columns,
    )


@router.delete("/{keyspace}/column-families/{column_family}", status_code=status.HTTP_204_NO_CONTENT)
async def drop_column_family(
    keyspace: str,
    column_family: str,
    current_user: Optional[str] = Depends(get_current_user),
):
    """
    Drop a column family and all of its rows.

    Raises:
        - 404: Keyspace or column family does not exist
    """
    SchemaService().drop_column_family(keyspace, column_family)
