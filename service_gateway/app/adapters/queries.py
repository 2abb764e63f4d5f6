"""
GraphQL documents and payload builders for the storefront provider.

The provider accepts batched operations, so every payload is a one-element
JSON array.
"""

from __future__ import annotations

from typing import Any, Dict, List

import httpx

SEARCH_OPERATION = "SearchProductQueryV4"
LOOKUP_OPERATION = "PDPGetLayoutQuery"

SEARCH_QUERY = """query SearchProductQueryV4($params: String!) {
  ace_search_product_v4(params: $params) {
    header {
      totalData
      responseCode
      errorMessage
      __typename
    }
    data {
      suggestion {
        currentKeyword
        suggestion
        suggestionCount
        instead
        query
        text
        __typename
      }
      products {
        id
        name
        categoryId
        categoryName
        imageUrl
        originalPrice
        price
        rating
        shop {
          shopId: id
          name
          url
          city
          isOfficial
          isPowerBadge
          __typename
        }
        url
        __typename
      }
      __typename
    }
    __typename
  }
}
"""

LOOKUP_QUERY = """fragment ProductHighlight on pdpDataProductContent {
  name
  price {
    value
    currency
    __typename
  }
  stock {
    useStock
    value
    stockWording
    __typename
  }
  __typename
}

fragment ProductDetail on pdpDataProductDetail {
  content {
    title
    subtitle
    applink
    showAtFront
    isAnnotation
    __typename
  }
  __typename
}

query PDPGetLayoutQuery($shopDomain: String, $productKey: String, $layoutID: String, $apiVersion: Float, $userLocation: pdpUserLocation, $extParam: String, $tokonow: pdpTokoNow) {
  pdpGetLayout(shopDomain: $shopDomain, productKey: $productKey, layoutID: $layoutID, apiVersion: $apiVersion, userLocation: $userLocation, extParam: $extParam, tokonow: $tokonow) {
    requestID
    name
    basicInfo {
      alias
      createdAt
      id: productID
      shopID
      shopName
      condition
      status
      url
      __typename
    }
    components {
      name
      type
      position
      data {
        ...ProductHighlight
        ...ProductDetail
        __typename
      }
      __typename
    }
    __typename
  }
}
"""

# Fixed search parameters; only "q" varies per request.
SEARCH_PARAMS = (
    ("device", "desktop"),
    ("navsource", "home"),
    ("ob", "23"),
    ("page", "1"),
    ("q", None),
    ("related", "true"),
    ("rows", "20"),
    ("safe_search", "false"),
    ("scheme", "https"),
    ("shipping", ""),
    ("source", "universe"),
    ("st", "product"),
    ("start", "0"),
    ("topads_bucket", "true"),
)


def build_search_params(query: str) -> str:
    """Encode the search term into the provider's single parameter string."""
    pairs = [(key, query if value is None else value) for key, value in SEARCH_PARAMS]
    return str(httpx.QueryParams(pairs))


def build_search_payload(query: str) -> List[Dict[str, Any]]:
    return [
        {
            "operationName": SEARCH_OPERATION,
            "variables": {"params": build_search_params(query)},
            "query": SEARCH_QUERY,
        }
    ]


def build_lookup_payload(seller: str, product: str) -> List[Dict[str, Any]]:
    return [
        {
            "operationName": LOOKUP_OPERATION,
            "variables": {
                "shopDomain": seller,
                "productKey": product,
                "layoutID": "",
                "apiVersion": 1,
            },
            "query": LOOKUP_QUERY,
        }
    ]
