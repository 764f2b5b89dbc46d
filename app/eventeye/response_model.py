def ResponseModel(data, message):
    return {
        "data": data,
        "code": 200,
        "message": message,
    }


def ErrorResponseModel(error, code, message, **extra):
    body = {"error": error, "code": code, "message": message}
    body.update(extra)
    return body
