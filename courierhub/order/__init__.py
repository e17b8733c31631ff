"""Orders: model, SQL storage, service, gRPC handler and server."""