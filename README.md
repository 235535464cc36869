# stocky2pc

A small HTTP coordinator that places orders across backend services reached
over gRPC:

- **IIMS** – product and sale information (`stocky2pc.clients.iims.IIMSClient`)
- **SMS** – stock amounts, store costs and supplies (`stocky2pc.clients.sms.SMSClient`)
- **SCS** – users (`stocky2pc.clients.scs.SCSClient`)
- **OMS** – products and orders (`stocky2pc.clients.oms.OMSClient`)

Install with `pip install .` (add `.[test]` for pytest).

## HTTP endpoints

`stocky2pc.controllers.OrderController` registers two `POST` routes. Both take
a JSON body of this form (keys are matched case-insensitively):

```json
{
  "comment": "leave at the door",
  "products": [
    {"uuid": "1b4e28ba-2fa1-11d2-883f-0016d3cca427", "amount": 2}
  ]
}
```

A body that is not valid JSON, or whose fields have the wrong types, gives
`400` with `{"error": "...\nfailed to parse body"}`. Any error raised by the
order service gives `500` with `{"error": "..."}`. On success the reply is
`200` with `{"order": {...}}`. The user and staff identifiers sent on are
always `"000000000000000000000000"`.

### `POST /api/order/create`

Calls `OrderService.create_order`. For every product it reads the stock amount
from SMS, raises `ProductOutOfStockError` if there is less than asked for, and
lowers the amount. It then creates the order in OMS and fills in each
product's name, description and price from IIMS by product code. If any step
fails, the stock amounts already lowered are set back and an order already
created in OMS is deleted. Requests to this endpoint are handled one at a
time. The order is returned as `Order.to_dict()`
(`uuid`, `comment`, `userId`, `staffId`, `price`, `products`).

### `POST /api/TCC/order/create`

Calls `OrderService.tcc_create_order`, which uses `OMSClient.tcc_order_creation`:
over a streaming call it sends an empty `CreateOrderRequest` first and the real
request second, and returns the first response. Each product `uuid` must parse
as a UUID, otherwise the reply is `400`. The order is returned as
`OrderResponse.to_dict()` with status `"new"`.

## Configuration

`stocky2pc.config.load_config(path=None, environ=None)` reads a YAML file
(by default `config/config.yaml`) into a frozen `Config`:

```yaml
rest_server:
  port: "8080"        # 8080 when missing or empty

iims:
  address: "localhost:50051"
  insecure: true
  timeout: 2s
  tries: 5
scs:
  address: "localhost:50052"
  insecure: true
  timeout: 2s
  tries: 5
sms:
  address: "localhost:50053"
  insecure: true
  timeout: 2s
  tries: 5
oms:
  address: "localhost:50054"
  insecure: true
  timeout: 2s
  tries: 5
```

- A key present in the file can be overridden by an environment variable
  named `2PC_` plus the key in upper case with dots turned into underscores,
  e.g. `2PC_REST_SERVER_PORT` or `2PC_OMS_ADDRESS`.
- Values may reference environment variables as `$VAR` or `${VAR}`; unknown
  variables expand to an empty string.
- `timeout` is parsed by `parse_duration` (`300ms`, `2s`, `1m30s`, …) into
  seconds.
- An unreadable file, bad YAML, a section that is not a mapping, or a value
  that cannot be parsed raises `ConfigError`.

## Wiring it together

```python
import grpc
from stocky2pc.config import load_config
from stocky2pc.connection import new_grpc_channel
from stocky2pc.clients.oms import OMSClient
from stocky2pc.services import OrderService
from stocky2pc.controllers import OrderController
from stocky2pc.web import HttpServer

cfg = load_config()
oms_channel = new_grpc_channel(cfg.oms.address, cfg.oms.timeout, cfg.oms.tries, cfg.oms.insecure)
# build stubs on the channels, then:
# oms = OMSClient(order_stub, product_stub, make_message)
# service = OrderService(oms, sms, scs, iims, make_message)
server = HttpServer(cfg.rest_server.port, OrderController(service))
server.listen_and_serve()   # blocks until server.shutdown() is called
```

`new_grpc_channel(address, timeout, tries, insecure)` opens an insecure or a
TLS channel, retrying up to `tries` more times with `timeout` seconds (or a
`timedelta`) between attempts; negative `tries` raises `ValueError`.

Each client takes the gRPC stubs it calls and an optional
`make_message(type_name, **fields)` factory that builds request messages from
their type name (such as `"CreateOrderRequest"`, `"UuidRequest"` or `"Empty"`)
and snake_case fields. Without a factory, requests are plain
`types.SimpleNamespace` objects, which is enough for tests with fake stubs.
`OrderService` takes the same kind of factory for the messages it builds.

`stocky2pc.web.create_app(*controllers)` returns a Flask application with the
controllers' routes, for use under any WSGI server. `HttpServer` serves it on
all interfaces; `bound_port` gives the port actually listened on, and after
`shutdown()` a further `listen_and_serve()` raises `RuntimeError`.

## What is not included

- No generated gRPC stubs or protobuf message classes: the caller must supply
  stubs and a `make_message` factory for the four services.
- No command-line program: there is no entry point that loads the
  configuration, connects to the backends and starts the server; that wiring
  is left to the caller as shown above.