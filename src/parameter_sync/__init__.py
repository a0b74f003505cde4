"""
Parameter Sync Task Collection

Synchronizes secrets from a local `pass` store into SSM Parameter Store.
"""

from invoke import Collection

from .tasks import params

# Create namespace with the parameter tasks nested under 'params'
namespace = Collection()
namespace.add_collection(Collection.from_module(params), name='params')
