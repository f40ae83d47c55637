import time


def _retry(fn, tries=3, base_delay=0.4, retry_on=(Exception,), sleep=time.sleep):
    """Simple retry with exponential backoff. Exceptions outside retry_on propagate at once."""
    last_exc = None
    for i in range(tries):
        try:
            return fn()
        except retry_on as e:
            last_exc = e
            if i < tries - 1:
                sleep(base_delay * (2 ** i))
    raise last_exc
