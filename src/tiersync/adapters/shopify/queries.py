"""GraphQL documents sent to the Shopify Admin API."""

from __future__ import annotations

from typing import Final

_CODES_FRAGMENT = "title codes(first: 10) { nodes { code } }"

FIND_CODE_DISCOUNTS: Final[str] = f"""
query FindCodeDiscounts($query: String!, $first: Int!) {{
  codeDiscountNodes(first: $first, query: $query) {{
    nodes {{
      id
      codeDiscount {{
        __typename
        ... on DiscountCodeBasic {{ {_CODES_FRAGMENT} }}
        ... on DiscountCodeBxgy {{ {_CODES_FRAGMENT} }}
        ... on DiscountCodeFreeShipping {{ {_CODES_FRAGMENT} }}
        ... on DiscountCodeApp {{ {_CODES_FRAGMENT} }}
      }}
    }}
  }}
}}
"""

CREATE_BASIC_CODE_DISCOUNT: Final[str] = """
mutation CreateBasicCodeDiscount($basicCodeDiscount: DiscountCodeBasicInput!) {
  discountCodeBasicCreate(basicCodeDiscount: $basicCodeDiscount) {
    codeDiscountNode { id }
    userErrors { field message }
  }
}
"""

UPDATE_BASIC_CODE_DISCOUNT: Final[str] = """
mutation UpdateBasicCodeDiscount($id: ID!, $basicCodeDiscount: DiscountCodeBasicInput!) {
  discountCodeBasicUpdate(id: $id, basicCodeDiscount: $basicCodeDiscount) {
    codeDiscountNode { id }
    userErrors { field message }
  }
}
"""

DELETE_CODE_DISCOUNT: Final[str] = """
mutation DeleteCodeDiscount($id: ID!) {
  discountCodeDelete(id: $id) {
    deletedCodeDiscountId
    userErrors { field message }
  }
}
"""
