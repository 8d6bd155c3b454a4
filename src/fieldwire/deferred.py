from fieldwire._internal.lazy import Lazy, LazyProxy, is_lazy_proxy, lazy, unwrap_lazy_proxy

__all__ = ["Lazy", "LazyProxy", "is_lazy_proxy", "lazy", "unwrap_lazy_proxy"]
