"""Repositories package — the generic read repository and its interface.

How to add a repository for a new model:
  1. class UserRepository(RepositoryBase[User, int]):
         model = User
  2. Add model-specific query methods on top of the inherited reads
"""
from repository_base.repositories.base import RepositoryBase
from repository_base.repositories.interface import AbstractRepository

__all__ = ["AbstractRepository", "RepositoryBase"]
