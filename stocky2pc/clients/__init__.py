"""Clients that call the inventory, order, customer and stock services through supplied gRPC stubs."""