"""核心层：配置、异常、模型、协议"""
