"""Test fixtures for tidegen tests.

This module provides sample API documents used across the test suite.
"""

import copy

# Minimal document for basic testing
MINIMAL_OPENAPI_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Minimal API', 'version': '1.0.0'},
    'paths': {},
}

# Team API covering enums, references, arrays, maps, query parameters and
# duplicated operation identifiers
TEAM_API_SPEC = {
    'openapi': '3.0.0',
    'info': {'title': 'Team API', 'version': '1.0.0'},
    'paths': {
        '/teams': {
            'get': {
                'tags': ['team'],
                'operationId': 'Team_List',
                'responses': {'200': {'description': 'OK'}},
            },
        },
        '/teams/all': {
            'get': {
                'tags': ['team'],
                'operationId': 'Team_List',
                'responses': {'200': {'description': 'OK'}},
            },
        },
        '/teams/search': {
            'get': {
                'tags': ['team'],
                'summary': 'Search teams',
                'operationId': 'Team_Search',
                'parameters': [
                    {
                        'name': 'page',
                        'in': 'query',
                        'required': True,
                        'description': 'Page number, starting at 1',
                        'schema': {'type': 'integer'},
                    },
                    {
                        'name': 'filter.name',
                        'in': 'query',
                        'schema': {'type': 'string'},
                    },
                ],
                'responses': {
                    '200': {
                        'description': 'OK',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/TeamPage'}
                            }
                        },
                    }
                },
            },
        },
        '/items': {
            'post': {
                'tags': ['Item'],
                'summary': 'Create an item',
                'operationId': 'Item_Create',
                'requestBody': {
                    'content': {
                        'application/json': {
                            'schema': {'$ref': '#/components/schemas/Item'}
                        }
                    }
                },
                'responses': {
                    '200': {
                        'description': 'OK',
                        'content': {
                            'application/json': {
                                'schema': {'$ref': '#/components/schemas/Item'}
                            }
                        },
                    }
                },
            },
            'get': {
                'operationId': 'Item_Query',
                'parameters': [
                    {
                        'name': 'id',
                        'in': 'path',
                        'required': True,
                        'schema': {'type': 'string'},
                    }
                ],
                'responses': {
                    '200': {
                        'description': 'OK',
                        'content': {
                            'application/json': {
                                'schema': {
                                    '$ref': '#/components/schemas/Billing.Invoice'
                                }
                            }
                        },
                    }
                },
            },
        },
        '/broken': {
            'get': {'tags': ['team'], 'responses': {}},
            'delete': {'tags': ['team'], 'operationId': 'Broken', 'responses': {}},
        },
    },
    'components': {
        'schemas': {
            'Status': {'type': 'string', 'enum': ['B', 'A']},
            'Item': {
                'type': 'object',
                'required': ['status'],
                'properties': {
                    'status': {'$ref': '#/components/schemas/Status'},
                    'tags': {'type': 'array', 'items': {'type': 'string'}},
                    'children': {
                        'type': 'array',
                        'items': {'$ref': '#/components/schemas/Foo'},
                    },
                    'labels': {
                        'type': 'object',
                        'additionalProperties': {'type': 'string'},
                    },
                },
            },
            'Foo': {
                'type': 'object',
                'description': 'A plain object',
                'properties': {'name': {'type': 'string'}},
            },
            'TeamPage': {
                'type': 'object',
                'properties': {
                    'items': {
                        'type': 'array',
                        'items': {'$ref': '#/components/schemas/Foo'},
                    },
                    'total': {'type': 'integer'},
                },
            },
            'Billing.Invoice': {
                'type': 'object',
                'properties': {
                    'state': {'$ref': '#/components/schemas/Billing.State'},
                    'owner': {'allOf': [{'$ref': '#/components/schemas/Foo'}]},
                },
            },
            'Billing.State': {'type': 'string', 'enum': ['open', 'paid']},
        }
    },
}


def reversed_spec(spec: dict) -> dict:
    """Return a copy of ``spec`` whose paths and schemas are in reverse order."""
    result = copy.deepcopy(spec)
    result['paths'] = dict(reversed(list(result.get('paths', {}).items())))
    for path, item in result['paths'].items():
        result['paths'][path] = dict(reversed(list(item.items())))
    components = result.get('components', {})
    if 'schemas' in components:
        components['schemas'] = dict(reversed(list(components['schemas'].items())))
    return result
